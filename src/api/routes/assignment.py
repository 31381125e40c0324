"""Assignment and grading routes."""

import logging

from fastapi import APIRouter, Depends, status

from api.routes.auth import get_current_user
from core.dependencies import AssignmentManagerDep, ClassManagerDep
from models.class_membership import ROLE_INSTRUCTOR
from models.user import UserModel
from schemas.assignment import (
    GRADE_STATUS_GRADED,
    GRADE_STATUS_UNGRADED,
    CreateAssignmentRequest,
    GradeAssignmentRequest,
    GradebookAssignment,
    GradebookRow,
    MyAssignmentInfo,
    StudentAssignmentInfo,
    StudentGradeRecord,
    UserGrade,
)
from utils.converters import (
    assignment_to_info,
    assignment_to_ref,
    grade_to_info,
    user_to_student_ref,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assignment", tags=["Assignment"])


@router.post("/create", status_code=status.HTTP_201_CREATED, summary="Create an assignment")
def create_assignment(
    req: CreateAssignmentRequest,
    assignment_manager: AssignmentManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    model = assignment_manager.create_assignment(
        current_user.user_id,
        req.class_id,
        req.title,
        req.description,
        req.due_date,
        req.points_possible,
    )
    return {
        "success": True,
        "message": "Assignment created successfully",
        "data": assignment_to_info(model),
    }


@router.get("/list/{class_id}", summary="List a class's assignments")
def list_assignments(
    class_id: str,
    assignment_manager: AssignmentManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    """List assignments by due date.

    Students see their own grade on each assignment; the Instructor listing
    carries no grade annotation.
    """
    _, assignments, own_grades = assignment_manager.list_assignments(
        current_user.user_id, class_id
    )
    if own_grades is None:
        data = [assignment_to_info(a) for a in assignments]
    else:
        data = []
        for assignment in assignments:
            grade = own_grades.get(assignment.assignment_id)
            data.append(
                StudentAssignmentInfo(
                    **assignment_to_info(assignment).model_dump(),
                    user_grade=(
                        UserGrade(score=grade.score, feedback=grade.feedback or "")
                        if grade
                        else None
                    ),
                )
            )
    return {"success": True, "data": data}


@router.get("/my-assignments", summary="List assignments across my classes")
def list_my_assignments(
    assignment_manager: AssignmentManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    rows = assignment_manager.list_assignments_for_user(current_user.user_id)
    return {
        "success": True,
        "data": [
            MyAssignmentInfo(
                **assignment_to_info(assignment).model_dump(),
                class_name=class_model.name,
            )
            for assignment, class_model in rows
        ],
    }


@router.delete("/{assignment_id}", summary="Delete an assignment")
def delete_assignment(
    assignment_id: str,
    assignment_manager: AssignmentManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    assignment_manager.delete_assignment(current_user.user_id, assignment_id)
    return {"success": True, "message": "Assignment deleted successfully"}


@router.post("/grade", summary="Grade a student's assignment")
def grade_assignment(
    req: GradeAssignmentRequest,
    assignment_manager: AssignmentManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    grade = assignment_manager.grade_assignment(
        current_user.user_id,
        req.assignment_id,
        req.student_id,
        req.score,
        req.feedback,
    )
    return {
        "success": True,
        "message": "Grade saved successfully",
        "data": grade_to_info(grade),
    }


@router.get("/grades/{class_id}", summary="Get grades for a class")
def get_grades(
    class_id: str,
    assignment_manager: AssignmentManagerDep,
    class_manager: ClassManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    """Instructor: full gradebook. Student: only their own grade records."""
    role = class_manager.require_class_access(current_user.user_id, class_id)

    if role == ROLE_INSTRUCTOR:
        data = []
        for assignment, rows in assignment_manager.get_instructor_gradebook(class_id):
            grade_rows = []
            for student, grade in rows:
                if grade is None:
                    grade_rows.append(
                        GradebookRow(
                            student=user_to_student_ref(student),
                            status=GRADE_STATUS_UNGRADED,
                        )
                    )
                else:
                    grade_rows.append(
                        GradebookRow(
                            student=user_to_student_ref(student),
                            score=grade.score,
                            feedback=grade.feedback or "",
                            graded_at=grade.graded_at,
                            status=GRADE_STATUS_GRADED,
                        )
                    )
            data.append(
                GradebookAssignment(
                    id=assignment.assignment_id,
                    title=assignment.title,
                    points_possible=assignment.points_possible,
                    due_date=assignment.due_date,
                    grades=grade_rows,
                )
            )
        return {"success": True, "data": data}

    records = assignment_manager.get_student_grades(class_id, current_user.user_id)
    return {
        "success": True,
        "data": [
            StudentGradeRecord(
                assignment=assignment_to_ref(assignment),
                score=grade.score,
                feedback=grade.feedback or "",
                graded_at=grade.graded_at,
            )
            for assignment, grade in records
        ],
    }
