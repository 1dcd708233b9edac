import json

import pytest

from degree_planner.engines import CourseNormalizer
from degree_planner.engines.normalizer import (
    strip_query,
    infer_level_from_url,
    fix_title_number,
    has_lab_suffix,
)
from degree_planner.errors import ValidationError
from degree_planner.models import CourseLevel

BASE = "https://study.com/academy/course/"


@pytest.fixture
def normalizer():
    return CourseNormalizer()


def test_query_string_duplicates_collapse(normalizer):
    rows = [
        {"subject": "Business", "title": "Business 101: Management", "url": BASE + "business-101.html"},
        {"subject": "Business", "title": "Business 101: Management (copy)", "url": BASE + "business-101.html?src=x"},
    ]

    cleaned = normalizer.normalize(rows)

    assert len(cleaned) == 1
    assert cleaned[0].url == BASE + "business-101.html"
    assert cleaned[0].title == "Business 101: Management"


def test_records_without_url_are_not_folded(normalizer):
    rows = [{"title": "Orientation"}, {"title": "Orientation"}]

    assert len(normalizer.normalize(rows)) == 2


def test_url_number_wins_over_title(normalizer):
    course = normalizer.normalize_record(
        {"subject": "Math", "title": "Math 301: Linear Algebra", "url": BASE + "linear-algebra-201.html"}
    )

    assert course.title == "Math 201: Linear Algebra"
    assert course.level == CourseLevel.LOWER
    assert course.course_number == 201
    assert course.is_upper_level is False


def test_upper_level_from_url(normalizer):
    course = normalizer.normalize_record({"title": "Ethics", "url": BASE + "business-ethics-305.html"})

    assert course.level == CourseLevel.UPPER
    # No number in the title head: left unchanged
    assert course.title == "Ethics"


def test_level_falls_back_to_record_then_unknown(normalizer):
    with_level = normalizer.normalize_record({"title": "Ed Psych", "url": BASE + "ed-psych.html", "level": "upper"})
    without = normalizer.normalize_record({"title": "Ed Psych", "url": BASE + "ed-psych.html"})
    bogus = normalizer.normalize_record({"title": "Ed Psych", "url": BASE + "ed-psych.html", "level": "graduate"})

    assert with_level.level == CourseLevel.UPPER
    assert with_level.course_number is None
    assert without.level == CourseLevel.UNKNOWN
    assert bogus.level == CourseLevel.UNKNOWN


def test_subject_mapping_and_passthrough(normalizer):
    mapped = normalizer.normalize_record({"subject": "Education & Teaching", "title": "x"})
    passthrough = normalizer.normalize_record({"subject": "Philosophy", "title": "x"})
    missing = normalizer.normalize_record({"title": "x"})

    assert mapped.subject == "Education"
    assert passthrough.subject == "Philosophy"
    assert missing.subject is None


def test_credit_defaults(normalizer):
    course = normalizer.normalize_record({"title": "x"})
    explicit = normalizer.normalize_record({"title": "x", "credit_value": 1, "credit_type": "NCCRS"})

    assert (course.credit_value, course.credit_type) == (3, "ACE")
    assert (explicit.credit_value, explicit.credit_type) == (1, "NCCRS")


def test_lab_flag_explicit_or_inferred(normalizer):
    inferred = normalizer.normalize_record({"title": "Biology 111l: Lab", "url": BASE + "biology-111l.html"})
    explicit = normalizer.normalize_record({"title": "Chemistry", "has_lab": True})
    plain = normalizer.normalize_record({"title": "Biology 111: Lecture"})

    assert inferred.has_lab is True
    assert inferred.course_number == 111
    assert explicit.has_lab is True
    assert plain.has_lab is False


def test_provider_default_and_override(normalizer):
    assert normalizer.normalize_record({"title": "x"}).provider == "Study.com"
    assert normalizer.normalize_record({"title": "x", "provider": "Sophia"}).provider == "Sophia"


def test_normalize_is_deterministic(normalizer):
    rows = [
        {"subject": "Math", "title": "Math 101: Algebra", "url": BASE + "math-101.html"},
        {"subject": "Science", "title": "Biology 111L", "url": BASE + "biology-111l.html"},
    ]

    assert normalizer.normalize(rows) == normalizer.normalize(rows)


def test_helpers():
    assert strip_query(BASE + "a-101.html?x=1#top") == BASE + "a-101.html"
    assert strip_query("") == ""
    assert infer_level_from_url(BASE + "economics-202-macro.html") == (202, CourseLevel.LOWER)
    assert infer_level_from_url(BASE + "course-1011.html") == (None, CourseLevel.UNKNOWN)
    assert infer_level_from_url("") == (None, CourseLevel.UNKNOWN)
    assert fix_title_number("Econ 301: Macro: Part 1", 202) == "Econ 202: Macro: Part 1"
    assert fix_title_number("Econ 301: Macro", None) == "Econ 301: Macro"
    assert has_lab_suffix("Physics 210L") is True


def test_normalize_file_round_trip(tmp_path, normalizer):
    raw = tmp_path / "raw.json"
    out = tmp_path / "out" / "clean.json"
    raw.write_text(json.dumps([
        {"subject": "Math", "title": "Math 301: Linear Algebra", "url": BASE + "linear-algebra-201.html"},
        {"subject": "Math", "title": "Math 301: Linear Algebra", "url": BASE + "linear-algebra-201.html?a=b"},
    ]))

    cleaned = normalizer.normalize_file(raw, out)
    written = json.loads(out.read_text())

    assert len(cleaned) == 1
    assert written[0]["level"] == "lower"
    assert written[0]["title"] == "Math 201: Linear Algebra"


def test_non_object_record_rejected(normalizer):
    with pytest.raises(ValidationError, match="must be an object"):
        normalizer.normalize([{"title": "Math 101: Algebra"}, ["not", "a", "record"]])
