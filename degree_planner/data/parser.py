"""
Record parsing.

This module converts plain JSON records into model dataclasses. It is the
field-level validation boundary: the engines trust what comes out of here
and only run structural cross-checks of their own.
"""

from typing import Optional

from ..config import (
    MIN_ENROLLMENT_CREDITS,
    MAX_ENROLLMENT_CREDITS,
    DEFAULT_TOTAL_REQUIRED,
    DEFAULT_UL_REQUIRED,
)
from ..errors import ValidationError
from ..models import (
    CanonicalCourse,
    CourseLevel,
    Enrollment,
    EnrollmentStatus,
    EnrollmentSource,
    RequirementSlot,
    Program,
    TemplateCourse,
    CourseTemplate,
    infer_upper_level,
)


def _get(data: dict, snake: str, camel: str = None, default=None):
    """Read a field that may arrive in snake_case or camelCase."""
    if snake in data:
        return data[snake]
    if camel and camel in data:
        return data[camel]
    return default


def _require(data: dict, kind: str, snake: str, camel: str = None):
    value = _get(data, snake, camel)
    if value is None or value == "":
        raise ValidationError(f"{kind} record is missing '{snake}': {data!r}")
    return value


def _as_str(value, kind: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{kind} field '{field_name}' must be a non-empty string (got {value!r})")
    return value


def _as_int(value, kind: str, field_name: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{kind} field '{field_name}' must be an integer (got {value!r})")
    return value


class RecordParser:
    """
    Parses programs, requirement slots, enrollments and templates.

    ENRICHMENT:
    ----------
    Enrollments entered by hand often lack an area or an upper-level flag.
    When a canonical catalog index is supplied, missing values are filled
    from the matching catalog entry (subject -> area, level -> upper-level
    flag). Without a match, the upper-level flag falls back to the number
    in the course code ("MATH 301" -> True).

    Both snake_case and camelCase keys are accepted, since records come from
    the database export and from the web client.
    """

    def __init__(self, catalog_index: Optional[dict] = None):
        # code key ("math 201") -> CanonicalCourse
        self.catalog_index = catalog_index or {}

    # -------------------------------------------------------------------------
    # Requirement model
    # -------------------------------------------------------------------------

    def parse_program(self, data: dict) -> Program:
        return Program(
            id=str(_require(data, "Program", "id")),
            title=_require(data, "Program", "title"),
            catalog_year=_as_int(
                _require(data, "Program", "catalog_year", "catalogYear"), "Program", "catalog_year"
            ),
            total_required=_as_int(
                _get(data, "total_required", "totalRequired", DEFAULT_TOTAL_REQUIRED),
                "Program", "total_required",
            ),
            ul_required=_as_int(
                _get(data, "ul_required", "ulRequired", DEFAULT_UL_REQUIRED),
                "Program", "ul_required",
            ),
        )

    def parse_slot(self, data: dict) -> RequirementSlot:
        max_credits = _get(data, "max_credits", "maxCredits")
        if max_credits is not None:
            max_credits = _as_int(max_credits, "Requirement", "max_credits")

        return RequirementSlot(
            id=str(_require(data, "Requirement", "id")),
            program_id=str(_require(data, "Requirement", "program_id", "programId")),
            code=_require(data, "Requirement", "code"),
            title=_get(data, "title", default="") or "",
            area=_require(data, "Requirement", "area"),
            min_credits=_as_int(
                _require(data, "Requirement", "min_credits", "minCredits"), "Requirement", "min_credits"
            ),
            max_credits=max_credits,
            is_upper_level=bool(_get(data, "is_upper_level", "isUpperLevel", False)),
            sequence=_as_int(_get(data, "sequence", default=0), "Requirement", "sequence"),
            allows_overlap=bool(_get(data, "allows_overlap", "allowsOverlap", False)),
        )

    # -------------------------------------------------------------------------
    # Enrollments
    # -------------------------------------------------------------------------

    def parse_enrollment(self, data: dict) -> Enrollment:
        if not isinstance(data, dict):
            raise ValidationError(f"Enrollment record must be an object (got {data!r})")
        course_code = _as_str(
            _require(data, "Enrollment", "course_code", "courseCode"), "Enrollment", "course_code"
        )
        credits = self._parse_credits(_require(data, "Enrollment", "credits"), "Enrollment")

        status_str = _get(data, "status", default=EnrollmentStatus.TODO.value)
        try:
            status = EnrollmentStatus(status_str)
        except ValueError:
            raise ValidationError(
                f"Enrollment {data.get('id')}: unknown status {status_str!r}"
            ) from None

        source_str = _get(data, "source", default=EnrollmentSource.SELF.value)
        try:
            source = EnrollmentSource(source_str)
        except ValueError:
            raise ValidationError(
                f"Enrollment {data.get('id')}: unknown source {source_str!r}"
            ) from None

        area = _get(data, "area")
        is_upper_level = _get(data, "is_upper_level", "isUpperLevel")
        area, is_upper_level = self._enrich(course_code, area, is_upper_level)

        return Enrollment(
            id=str(_require(data, "Enrollment", "id")),
            student_id=str(_require(data, "Enrollment", "student_id", "studentId")),
            provider_id=str(_require(data, "Enrollment", "provider_id", "providerId")),
            course_code=course_code,
            title=_get(data, "title", default="") or "",
            credits=credits,
            status=status,
            area=area,
            is_upper_level=is_upper_level,
            source=source,
            assigned_by=_get(data, "assigned_by", "assignedBy"),
            course_url=_get(data, "course_url", "courseUrl"),
            notes=_get(data, "notes"),
        )

    def _enrich(self, course_code: str, area, is_upper_level) -> tuple:
        catalog_course = self.catalog_index.get(course_code.strip().casefold())

        if not area and catalog_course is not None:
            area = catalog_course.subject
        if is_upper_level is None:
            if catalog_course is not None and catalog_course.level != CourseLevel.UNKNOWN:
                is_upper_level = catalog_course.is_upper_level
            else:
                is_upper_level = infer_upper_level(course_code)

        return area or None, is_upper_level

    @staticmethod
    def _parse_credits(value, kind: str) -> int:
        credits = _as_int(value, kind, "credits")
        if not MIN_ENROLLMENT_CREDITS <= credits <= MAX_ENROLLMENT_CREDITS:
            raise ValidationError(
                f"{kind} credits must be between {MIN_ENROLLMENT_CREDITS} and "
                f"{MAX_ENROLLMENT_CREDITS} (got {credits})"
            )
        return credits

    # -------------------------------------------------------------------------
    # Templates and catalog
    # -------------------------------------------------------------------------

    def parse_template(self, data: dict) -> CourseTemplate:
        courses = []
        for c in _get(data, "courses", default=[]) or []:
            courses.append(TemplateCourse(
                provider_id=str(_require(c, "Template course", "provider_id", "providerId")),
                course_code=_as_str(
                    _require(c, "Template course", "course_code", "courseCode"), "Template course", "course_code"
                ),
                title=_get(c, "title", default="") or "",
                credits=self._parse_credits(_require(c, "Template course", "credits"), "Template course"),
                area=_get(c, "area"),
                is_upper_level=_get(c, "is_upper_level", "isUpperLevel"),
                course_url=_get(c, "course_url", "courseUrl"),
            ))

        return CourseTemplate(
            id=str(_require(data, "Template", "id")),
            name=_require(data, "Template", "name"),
            is_default=bool(_get(data, "is_default", "isDefault", False)),
            courses=tuple(courses),
        )

    @staticmethod
    def parse_canonical_course(data: dict) -> CanonicalCourse:
        """Read back a record written by CourseNormalizer.normalize_file()."""
        try:
            level = CourseLevel(data.get("level") or "unknown")
        except ValueError:
            level = CourseLevel.UNKNOWN
        return CanonicalCourse(
            provider=data.get("provider", ""),
            subject=data.get("subject"),
            title=data.get("title", ""),
            url=data.get("url", ""),
            level=level,
            course_number=data.get("course_number"),
            credit_value=data.get("credit_value", 0),
            credit_type=data.get("credit_type", ""),
            has_lab=bool(data.get("has_lab", False)),
            description=data.get("description"),
        )
