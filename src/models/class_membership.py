from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base

ROLE_INSTRUCTOR = "Instructor"
ROLE_STUDENT = "Student"


class ClassMembershipModel(Base):
    __tablename__ = "class_memberships"
    # One row per (class, user): a user holds exactly one role in a class
    __table_args__ = (
        UniqueConstraint("class_id", "user_id", name="uq_class_memberships_class_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.class_id", ondelete="CASCADE"), index=True)
    user_id = Column(String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True)
    role_in_class = Column(String, nullable=False)  # 'Instructor' or 'Student'
    joined_at = Column(String, nullable=False)

    class_ = relationship("ClassModel", back_populates="memberships")
    user = relationship("UserModel")
