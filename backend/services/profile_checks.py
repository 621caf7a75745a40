"""Profile validation and the profile editor's completeness meter."""

import re

from models.schemas.profile import UserProfile

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[\d\-+().\s]+$")

GRADUATION_YEAR_RANGE = (2020, 2030)
GPA_RANGE = (0.0, 4.0)

REQUIRED_FIELDS: tuple[str, ...] = (
    "name", "email", "university", "faculty", "graduation_year",
    "target_industries", "self_pr", "student_activities",
)
OPTIONAL_FIELDS: tuple[str, ...] = (
    "department", "gpa", "phone", "target_positions",
    "work_experience", "skills", "qualifications", "portfolio_url",
)
REQUIRED_POINTS = 10
OPTIONAL_POINTS = 5


def validate_profile(profile: UserProfile) -> list[str]:
    """Return human-readable validation errors; empty when the profile is valid."""
    errors: list[str] = []

    if not profile.name.strip():
        errors.append("氏名は必須です")

    if not profile.email.strip():
        errors.append("メールアドレスは必須です")
    elif not EMAIL_RE.match(profile.email):
        errors.append("メールアドレスの形式が正しくありません")

    if not profile.university.strip():
        errors.append("大学名は必須です")
    if not profile.faculty.strip():
        errors.append("学部名は必須です")

    low, high = GRADUATION_YEAR_RANGE
    if not profile.graduation_year or not low <= profile.graduation_year <= high:
        errors.append("卒業年度を正しく入力してください")

    if profile.gpa and not GPA_RANGE[0] <= profile.gpa <= GPA_RANGE[1]:
        errors.append("GPAは0.0〜4.0の範囲で入力してください")

    if profile.phone and not PHONE_RE.match(profile.phone):
        errors.append("電話番号の形式が正しくありません")

    return errors


def profile_completeness(profile: UserProfile) -> int:
    """Percentage of filled fields, required fields weighted double."""
    score = 0
    max_score = 0
    for field in REQUIRED_FIELDS:
        max_score += REQUIRED_POINTS
        if getattr(profile, field):
            score += REQUIRED_POINTS
    for field in OPTIONAL_FIELDS:
        max_score += OPTIONAL_POINTS
        if getattr(profile, field):
            score += OPTIONAL_POINTS
    return round(score / max_score * 100)
