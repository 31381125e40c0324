"""Assignment and grade management utilities."""

import logging
import math
import secrets
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import AssignmentNotFoundError, ValidationError
from models.assignment import AssignmentModel
from models.class_membership import ROLE_STUDENT, ClassMembershipModel
from models.class_model import ClassModel
from models.grade import GradeModel
from models.user import UserModel
from utils.class_manager import ClassManager
from utils.timestamps import to_iso, utc_now_iso

logger = logging.getLogger(__name__)


class AssignmentManager:
    """Manages assignments and the grades attached to them."""

    def __init__(self, db: Session):
        self.db = db
        self.class_manager = ClassManager(db)

    def create_assignment(
        self,
        user_id: str,
        class_id: str,
        title: str,
        description: str,
        due_date: datetime,
        points_possible: float,
    ) -> AssignmentModel:
        """Create an assignment in a class.

        Args:
            user_id: Caller; must be the class Instructor.
            class_id: Target class.
            title: Assignment title.
            description: Assignment description.
            due_date: Due date; naive values are taken as UTC.
            points_possible: Maximum score, non-negative.

        Returns:
            The persisted AssignmentModel.

        Raises:
            ValidationError: If points_possible is negative.
            ClassNotFoundError: If the class does not exist.
            AccessDeniedError: If the caller has no role in the class.
            InstructorOnlyError: If the caller is a Student.
        """
        if not math.isfinite(points_possible) or points_possible < 0:
            raise ValidationError("Points possible must be non-negative")
        self.class_manager.require_instructor(user_id, class_id, "create assignments")

        now = utc_now_iso()
        model = AssignmentModel(
            assignment_id=secrets.token_hex(8),
            class_id=class_id,
            title=title,
            description=description,
            due_date=to_iso(due_date),
            points_possible=points_possible,
            created_by=user_id,
            created_at=now,
            updated_at=now,
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created assignment %s in class %s", model.assignment_id, class_id)
        return model

    def get_assignment(self, assignment_id: str) -> AssignmentModel:
        model = (
            self.db.query(AssignmentModel)
            .filter(AssignmentModel.assignment_id == assignment_id)
            .first()
        )
        if not model:
            raise AssignmentNotFoundError(assignment_id)
        return model

    def _class_assignments(self, class_id: str) -> List[AssignmentModel]:
        return (
            self.db.query(AssignmentModel)
            .filter(AssignmentModel.class_id == class_id)
            .order_by(AssignmentModel.due_date.asc(), AssignmentModel.created_at.asc())
            .all()
        )

    def _grades_for_student(
        self, assignment_ids: List[str], student_id: str
    ) -> Dict[str, GradeModel]:
        if not assignment_ids:
            return {}
        grades = (
            self.db.query(GradeModel)
            .filter(
                GradeModel.assignment_id.in_(assignment_ids),
                GradeModel.student_id == student_id,
            )
            .all()
        )
        return {g.assignment_id: g for g in grades}

    def list_assignments(
        self, user_id: str, class_id: str
    ) -> Tuple[str, List[AssignmentModel], Optional[Dict[str, GradeModel]]]:
        """List a class's assignments by ascending due date.

        Returns:
            (role, assignments, own_grades). ``own_grades`` maps assignment id
            to the caller's grade when the caller is a Student and is None for
            the Instructor.
        """
        role = self.class_manager.require_class_access(user_id, class_id)
        assignments = self._class_assignments(class_id)
        if role != ROLE_STUDENT:
            return role, assignments, None
        own_grades = self._grades_for_student(
            [a.assignment_id for a in assignments], user_id
        )
        return role, assignments, own_grades

    def list_assignments_for_user(
        self, user_id: str
    ) -> List[Tuple[AssignmentModel, ClassModel]]:
        """All assignments of every class the user teaches or attends."""
        rows = (
            self.db.query(AssignmentModel, ClassModel)
            .join(ClassModel, ClassModel.class_id == AssignmentModel.class_id)
            .join(
                ClassMembershipModel,
                ClassMembershipModel.class_id == ClassModel.class_id,
            )
            .filter(ClassMembershipModel.user_id == user_id)
            .order_by(AssignmentModel.due_date.asc())
            .all()
        )
        return [(assignment, class_model) for assignment, class_model in rows]

    def delete_assignment(self, user_id: str, assignment_id: str) -> None:
        """Delete an assignment together with every grade that references it.

        Both deletions are committed in one transaction.
        """
        assignment = self.get_assignment(assignment_id)
        self.class_manager.require_instructor(
            user_id, assignment.class_id, "delete assignments"
        )

        deleted_grades = (
            self.db.query(GradeModel)
            .filter(GradeModel.assignment_id == assignment_id)
            .delete(synchronize_session=False)
        )
        self.db.delete(assignment)
        self.db.commit()
        logger.info(
            "Deleted assignment %s and %d grades", assignment_id, deleted_grades
        )

    def grade_assignment(
        self,
        user_id: str,
        assignment_id: str,
        student_id: str,
        score: float,
        feedback: str = "",
    ) -> GradeModel:
        """Create or overwrite the grade of one student on one assignment.

        Args:
            user_id: Caller; must be the Instructor of the assignment's class.
            assignment_id: Graded assignment.
            student_id: Graded student; must be a current class member.
            score: Score within [0, points_possible].
            feedback: Optional feedback text.

        Returns:
            The persisted GradeModel. Re-grading keeps the same row.

        Raises:
            AssignmentNotFoundError: If the assignment does not exist.
            AccessDeniedError: If the caller has no role in the class.
            InstructorOnlyError: If the caller is a Student.
            ValidationError: If the score is out of range or the student is
                not a member of the class.
        """
        assignment = self.get_assignment(assignment_id)
        self.class_manager.require_instructor(
            user_id, assignment.class_id, "grade assignments"
        )

        if not math.isfinite(score):
            raise ValidationError("Score must be a valid number")
        if score < 0 or score > assignment.points_possible:
            raise ValidationError(
                f"Score must be between 0 and {assignment.points_possible:g}"
            )
        if not self.class_manager.is_member(student_id, assignment.class_id):
            raise ValidationError("Student is not a member of this class")

        grade = self._find_grade(assignment_id, student_id)
        if grade is None:
            grade = GradeModel(assignment_id=assignment_id, student_id=student_id)
            self.db.add(grade)
        self._apply_grade(grade, score, feedback, user_id)

        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent request inserted the row first; overwrite it
            self.db.rollback()
            grade = self._find_grade(assignment_id, student_id)
            self._apply_grade(grade, score, feedback, user_id)
            self.db.commit()

        self.db.refresh(grade)
        logger.info(
            "Saved grade for student %s on assignment %s", student_id, assignment_id
        )
        return grade

    def _find_grade(self, assignment_id: str, student_id: str) -> Optional[GradeModel]:
        return (
            self.db.query(GradeModel)
            .filter(
                GradeModel.assignment_id == assignment_id,
                GradeModel.student_id == student_id,
            )
            .first()
        )

    @staticmethod
    def _apply_grade(grade: GradeModel, score: float, feedback: str, grader_id: str) -> None:
        grade.score = score
        grade.feedback = feedback or ""
        grade.graded_by = grader_id
        grade.graded_at = utc_now_iso()

    def get_instructor_gradebook(
        self, class_id: str
    ) -> List[Tuple[AssignmentModel, List[Tuple[UserModel, Optional[GradeModel]]]]]:
        """Every assignment with one entry per current Student.

        Students without a grade are paired with None.
        """
        students = self.class_manager.list_students(class_id)
        gradebook = []
        for assignment in self._class_assignments(class_id):
            grades = {g.student_id: g for g in assignment.grades}
            rows = [(student, grades.get(student.user_id)) for student in students]
            gradebook.append((assignment, rows))
        return gradebook

    def get_student_grades(
        self, class_id: str, student_id: str
    ) -> List[Tuple[AssignmentModel, GradeModel]]:
        """The student's own grades in a class, by assignment due date."""
        assignments = self._class_assignments(class_id)
        own_grades = self._grades_for_student(
            [a.assignment_id for a in assignments], student_id
        )
        return [
            (assignment, own_grades[assignment.assignment_id])
            for assignment in assignments
            if assignment.assignment_id in own_grades
        ]
