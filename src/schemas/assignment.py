"""Assignment and grade schema definitions."""

import math
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field, field_validator

from schemas.common import CamelModel

GRADE_STATUS_GRADED = "graded"
GRADE_STATUS_UNGRADED = "ungraded"

# Finite JSON numbers only; booleans and numeric strings are refused
StrictNumber = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class CreateAssignmentRequest(CamelModel):
    class_id: str
    title: str
    description: str
    due_date: datetime
    points_possible: StrictNumber

    @field_validator("title", "description")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Title and description are required.")
        return normalized

    @field_validator("points_possible")
    @classmethod
    def validate_points_possible(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("Points possible must be a finite number.")
        if value < 0:
            raise ValueError("Points possible must be non-negative.")
        return value


class GradeAssignmentRequest(CamelModel):
    assignment_id: str
    student_id: str
    score: StrictNumber
    feedback: str = ""


class AssignmentInfo(CamelModel):
    id: str
    class_id: str
    title: str
    description: str
    due_date: str
    points_possible: float
    created_at: str


class UserGrade(CamelModel):
    score: float
    feedback: str


class StudentAssignmentInfo(AssignmentInfo):
    """Assignment as listed to a Student, with that Student's own grade."""

    user_grade: Optional[UserGrade] = None


class MyAssignmentInfo(AssignmentInfo):
    class_name: str


class GradeInfo(CamelModel):
    id: int
    assignment_id: str
    student_id: str
    score: float
    feedback: str
    graded_by: str
    graded_at: str


class StudentRef(CamelModel):
    id: str
    email: str
    display_name: str


class GradebookRow(CamelModel):
    student: StudentRef
    score: Optional[float] = None
    feedback: str = ""
    graded_at: Optional[str] = None
    status: str


class GradebookAssignment(CamelModel):
    id: str
    title: str
    points_possible: float
    due_date: str
    grades: List[GradebookRow]


class AssignmentRef(CamelModel):
    id: str
    title: str
    points_possible: float
    due_date: str


class StudentGradeRecord(CamelModel):
    assignment: AssignmentRef
    score: float
    feedback: str
    graded_at: str
