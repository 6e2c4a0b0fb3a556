from models.session import Chair, Materials, Session, SessionDescription, SessionStateError
from models.room import Room
from models.slot import Slot
from models.project import Project

__all__ = [
    "Chair",
    "Materials",
    "Session",
    "SessionDescription",
    "SessionStateError",
    "Room",
    "Slot",
    "Project",
]
