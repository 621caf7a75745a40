"""User profile as maintained by the profile editor."""

from pydantic import BaseModel


class SalaryRange(BaseModel):
    min: int = 0
    max: int = 0


class WorkExperience(BaseModel):
    """A single work experience entry (part-time jobs, internships)."""
    id: str = ""
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""
    is_current_position: bool = False


class Skill(BaseModel):
    id: str = ""
    name: str = ""
    level: str = "beginner"  # beginner, intermediate, advanced, expert
    category: str = "other"  # technical, soft, language, other


class Qualification(BaseModel):
    id: str = ""
    name: str = ""
    organization: str = ""
    obtained_date: str = ""


class Language(BaseModel):
    id: str = ""
    name: str = ""
    level: str = "basic"  # basic, conversational, business, native
    toeic_score: int | None = None
    toefl_score: int | None = None


class UserProfile(BaseModel):
    id: str = ""
    user_id: str = ""

    # Identity
    name: str = ""
    email: str = ""
    phone: str = ""

    # Academic
    university: str = ""
    faculty: str = ""
    department: str = ""
    graduation_year: int | None = None
    gpa: float | None = None

    # Job hunting
    job_hunting_status: str = "preparing"  # preparing, active, completed
    target_industries: list[str] = []
    target_positions: list[str] = []
    desired_salary_range: SalaryRange = SalaryRange()

    # Experience and skills
    work_experience: list[WorkExperience] = []
    skills: list[Skill] = []
    qualifications: list[Qualification] = []
    languages: list[Language] = []

    # Self-PR and student activities (gakuchika)
    self_pr: str = ""
    student_activities: str = ""

    # Portfolio
    portfolio_url: str = ""
    github_url: str = ""
    linkedin_url: str = ""

    created_at: str = ""
    updated_at: str = ""
