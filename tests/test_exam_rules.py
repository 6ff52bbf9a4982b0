"""Tests for exam requirement rule evaluation."""

from datetime import date

import pytest

from app.core.exam_rules import (
    PatientProfile,
    calculate_age,
    resolve_required_exams,
)
from app.schemas.procedures import ExamRequirementRule

RULES = [
    ExamRequirementRule(gender="all", age_min=18, exams=["Hemograma"]),
    ExamRequirementRule(gender="female", conditions=["sexual_activity"], exams=["Beta HCG"]),
]


def test_adult_male_gets_age_rule_only():
    """Test a 25-year-old man only matches the adult rule."""
    profile = PatientProfile.build("male", 25)
    assert resolve_required_exams(RULES, profile) == ["Hemograma"]


def test_adult_female_with_condition_gets_both():
    """Test a 20-year-old woman with a matching condition matches both rules."""
    profile = PatientProfile.build("female", 20, ["sexual_activity"])
    assert set(resolve_required_exams(RULES, profile)) == {"Hemograma", "Beta HCG"}


@pytest.mark.parametrize("gender", ["male", "female", "other"])
def test_child_gets_nothing(gender: str):
    """Test a 10-year-old is excluded by the age guard."""
    profile = PatientProfile.build(gender, 10)
    assert resolve_required_exams(RULES, profile) == []


def test_age_bounds_are_inclusive():
    """Test both age bounds include the boundary ages."""
    rules = [ExamRequirementRule(age_min=40, age_max=60, exams=["Mamografia"])]

    assert resolve_required_exams(rules, PatientProfile.build("female", 40)) == ["Mamografia"]
    assert resolve_required_exams(rules, PatientProfile.build("female", 60)) == ["Mamografia"]
    assert resolve_required_exams(rules, PatientProfile.build("female", 39)) == []
    assert resolve_required_exams(rules, PatientProfile.build("female", 61)) == []


def test_unknown_age_fails_bounded_rules_only():
    """Test a patient without birth date skips bounded rules but keeps open ones."""
    rules = [
        ExamRequirementRule(age_min=18, exams=["Hemograma"]),
        ExamRequirementRule(exams=["Glicemia"]),
    ]
    assert resolve_required_exams(rules, PatientProfile.build("male", None)) == ["Glicemia"]


def test_conditions_are_or_matched_and_normalized():
    """Test any listed condition matches, ignoring case and padding."""
    rules = [ExamRequirementRule(conditions=["Diabetes", "hipertensao"], exams=["ECG"])]

    assert resolve_required_exams(rules, PatientProfile.build(None, 50, [" HIPERTENSAO "])) == [
        "ECG"
    ]
    assert resolve_required_exams(rules, PatientProfile.build(None, 50, ["asma"])) == []


def test_unknown_gender_only_matches_all():
    """Test a profile without gender matches only rules open to everyone."""
    rules = [
        ExamRequirementRule(gender="female", exams=["Papanicolau"]),
        ExamRequirementRule(gender="all", exams=["Hemograma"]),
    ]
    assert resolve_required_exams(rules, PatientProfile.build(None, 30)) == ["Hemograma"]


def test_exams_are_deduplicated_in_first_seen_order():
    """Test exams contributed by several rules appear once."""
    rules = [
        ExamRequirementRule(exams=["Hemograma", "Coagulograma"]),
        ExamRequirementRule(exams=["Coagulograma", "Urina tipo 1"]),
    ]
    assert resolve_required_exams(rules, PatientProfile.build("male", 30)) == [
        "Hemograma",
        "Coagulograma",
        "Urina tipo 1",
    ]


def test_rule_validation():
    """Test malformed rules are rejected when parsed."""
    with pytest.raises(ValueError):
        ExamRequirementRule(age_min=60, age_max=18, exams=["Hemograma"])
    with pytest.raises(ValueError):
        ExamRequirementRule(exams=[])
    with pytest.raises(ValueError):
        ExamRequirementRule(exams=["  "])


@pytest.mark.parametrize(
    ("birth", "today", "expected"),
    [
        (date(2000, 3, 15), date(2025, 3, 14), 24),
        (date(2000, 3, 15), date(2025, 3, 15), 25),
        (date(2004, 2, 29), date(2025, 2, 28), 20),
        (None, date(2025, 1, 1), None),
    ],
)
def test_calculate_age(birth, today, expected):
    """Test age in completed years."""
    assert calculate_age(birth, today) == expected
