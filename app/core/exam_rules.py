"""Exam requirement rule evaluation."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from app.schemas.procedures import ExamRequirementRule, Gender


def normalize_condition(tag: str) -> str:
    """Normalize a free-text condition tag for matching."""
    return tag.strip().casefold()


@dataclass(frozen=True)
class PatientProfile:
    """The patient attributes exam rules are evaluated against."""

    gender: str | None = None
    age: int | None = None
    conditions: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        gender: str | None,
        age: int | None,
        conditions: Iterable[str] = (),
    ) -> "PatientProfile":
        """Create a profile, normalizing condition tags."""
        tags = frozenset(normalize_condition(c) for c in conditions if c and c.strip())
        return cls(gender=gender, age=age, conditions=tags)


def calculate_age(birth_date: date | None, today: date) -> int | None:
    """
    Age in completed years on ``today``.

    Args:
        birth_date: Date of birth, if known
        today: Reference date

    Returns:
        Whole years elapsed, or None when the birth date is unknown
    """
    if birth_date is None:
        return None
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def gender_matches(rule: ExamRequirementRule, profile: PatientProfile) -> bool:
    """Gender guard: ``all`` matches everyone."""
    return rule.gender == Gender.ALL or rule.gender.value == profile.gender


def age_matches(rule: ExamRequirementRule, profile: PatientProfile) -> bool:
    """Age guard with inclusive bounds; an unknown age fails any bounded rule."""
    if not rule.has_age_bounds:
        return True
    if profile.age is None:
        return False
    if rule.age_min is not None and profile.age < rule.age_min:
        return False
    if rule.age_max is not None and profile.age > rule.age_max:
        return False
    return True


def conditions_match(rule: ExamRequirementRule, profile: PatientProfile) -> bool:
    """Condition guard: any listed condition present on the patient."""
    if not rule.conditions:
        return True
    return any(normalize_condition(c) in profile.conditions for c in rule.conditions)


def rule_applies(rule: ExamRequirementRule, profile: PatientProfile) -> bool:
    """Check whether every guard of a rule passes for a patient."""
    return (
        gender_matches(rule, profile)
        and age_matches(rule, profile)
        and conditions_match(rule, profile)
    )


def resolve_required_exams(
    rules: Iterable[ExamRequirementRule],
    profile: PatientProfile,
) -> list[str]:
    """
    Collect the exams of every applicable rule.

    Args:
        rules: A procedure's exam requirement rules
        profile: Patient attributes

    Returns:
        Deduplicated exam names in first-seen order
    """
    exams: dict[str, None] = {}
    for rule in rules:
        if rule_applies(rule, profile):
            for exam in rule.exams:
                exams.setdefault(exam, None)
    return list(exams)
