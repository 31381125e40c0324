"""Grade database model."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class GradeModel(Base):
    """Score and feedback for one student on one assignment."""

    __tablename__ = "grades"
    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_grades_assignment_student"),
    )

    id = Column(Integer, primary_key=True, index=True)
    assignment_id = Column(
        String,
        ForeignKey("assignments.assignment_id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    student_id = Column(String, ForeignKey("users.user_id"), index=True, nullable=False)
    score = Column(Float, nullable=False)
    feedback = Column(String, nullable=False, default="")
    graded_by = Column(String, ForeignKey("users.user_id"), nullable=False)
    graded_at = Column(String, nullable=False)

    assignment = relationship("AssignmentModel", back_populates="grades")
    student = relationship("UserModel", foreign_keys=[student_id])
