"""Project: Sessions, Räume und Slots eines Breakout-Projekts (Pydantic v2)."""

from typing import Optional, Union

from pydantic import BaseModel, Field

from models.room import Room
from models.session import Session
from models.slot import Slot


class Project(BaseModel):
    """Vollständiger Projekt-Datensatz: Sessions, Räume, Slots."""

    owner: str
    number: int
    title: str = ""
    sessions: list[Session] = []
    rooms: list[Room] = []
    slots: list[Slot] = []
    # Wird vom Aufrufer injiziert (CHAIR_W3CID), nicht Teil des Snapshots
    chairs_to_w3cid: dict[str, Union[int, str]] = Field(default_factory=dict)

    # ─── Nachschlagen ───

    def find_session(self, number: int) -> Optional[Session]:
        return next((s for s in self.sessions if s.number == number), None)

    def find_room(self, name: Optional[str]) -> Optional[Room]:
        if not name:
            return None
        return next((r for r in self.rooms if r.name == name), None)

    def slot_index(self, name: Optional[str]) -> int:
        """Position des Slots im Raster; -1 wenn unbekannt."""
        for i, slot in enumerate(self.slots):
            if slot.name == name:
                return i
        return -1

    def room_label(self, session: Session) -> str:
        """Raum-Teil des Topics: "- <label> " oder leer, wenn der Raum unbekannt ist."""
        room = self.find_room(session.room)
        return f"- {room.label} " if room else ""

    def chair_w3cid(self, name: str, login: Optional[str] = None) -> Optional[Union[int, str]]:
        """W3C-ID eines Chairs aus der injizierten Tabelle (Login vor Name)."""
        if login and login in self.chairs_to_w3cid:
            return self.chairs_to_w3cid[login]
        return self.chairs_to_w3cid.get(name)

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über das Projekt."""
        scheduled = sum(1 for s in self.sessions if s.slot)
        lines = [
            f"Projekt: {self.owner}/{self.number}" + (f" ({self.title})" if self.title else ""),
            f"Sessions: {len(self.sessions)} ({scheduled} mit Slot)",
            f"Räume: {len(self.rooms)}",
            f"Slots: {len(self.slots)}",
        ]
        return "\n".join(lines)
