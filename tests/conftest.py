import itertools

import pytest

from degree_planner.models import (
    Enrollment,
    EnrollmentStatus,
    RequirementSlot,
    TemplateCourse,
    CourseTemplate,
)


@pytest.fixture
def make_enrollment():
    counter = itertools.count(1)

    def _make(area="Math", credits=3, status="completed", is_upper_level=False,
              course_code=None, provider_id="study_com", student_id="student-1", id=None):
        n = next(counter)
        return Enrollment(
            id=id or f"enr-{n}",
            student_id=student_id,
            provider_id=provider_id,
            course_code=course_code or f"CRS {100 + n}",
            title=f"Course {n}",
            credits=credits,
            status=EnrollmentStatus(status),
            area=area,
            is_upper_level=is_upper_level,
        )

    return _make


@pytest.fixture
def make_slot():
    counter = itertools.count(1)

    def _make(area="Math", min_credits=6, max_credits=None, is_upper_level=False,
              sequence=None, allows_overlap=False, id=None):
        n = next(counter)
        return RequirementSlot(
            id=id or f"slot-{n}",
            program_id="prog-1",
            code=f"REQ-{n}",
            title=f"Requirement {n}",
            area=area,
            min_credits=min_credits,
            max_credits=max_credits,
            is_upper_level=is_upper_level,
            sequence=n if sequence is None else sequence,
            allows_overlap=allows_overlap,
        )

    return _make


@pytest.fixture
def template_ab():
    return CourseTemplate(
        id="tpl-1",
        name="Starter",
        is_default=True,
        courses=(
            TemplateCourse(provider_id="sophia", course_code="ENG 101", title="A", credits=3, area="English"),
            TemplateCourse(provider_id="sophia", course_code="MATH 110", title="B", credits=3, area="Math"),
        ),
    )
