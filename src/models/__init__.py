from .user import UserModel
from .auth_session import AuthSessionModel
from .class_model import ClassModel
from .class_membership import ClassMembershipModel
from .assignment import AssignmentModel
from .grade import GradeModel
from .chat import ChatModel, ChatParticipantModel
from .message import MessageModel
from .event import EventModel

__all__ = [
    "UserModel",
    "AuthSessionModel",
    "ClassModel",
    "ClassMembershipModel",
    "AssignmentModel",
    "GradeModel",
    "ChatModel",
    "ChatParticipantModel",
    "MessageModel",
    "EventModel",
]
