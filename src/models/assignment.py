"""Assignment database model."""

from sqlalchemy import Column, Float, ForeignKey, Index, String
from sqlalchemy.orm import relationship
from .base import Base


class AssignmentModel(Base):
    """An assignment posted by the Instructor of a class."""

    __tablename__ = "assignments"
    __table_args__ = (
        Index("idx_assignments_class_due", "class_id", "due_date"),
    )

    assignment_id = Column(String, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.class_id", ondelete="CASCADE"), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    due_date = Column(String, nullable=False)  # ISO format string, UTC
    points_possible = Column(Float, nullable=False)
    created_by = Column(String, ForeignKey("users.user_id"), nullable=False)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    class_ = relationship("ClassModel")
    grades = relationship(
        "GradeModel",
        back_populates="assignment",
        cascade="all, delete-orphan",
    )
