"""Datenmodell für eine Breakout-Session (Pydantic v2)."""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SessionStateError(RuntimeError):
    """Unzulässiger Zustandswechsel einer Session (z.B. zweimal "done")."""


class Chair(BaseModel):
    """Eine Person, die die Session leitet."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    login: Optional[str] = None                   # GitHub-Login
    w3c_id: Optional[Union[int, str]] = Field(None, alias="w3cId")


class Materials(BaseModel):
    """Links zu Agenda, Slides und Protokoll (dürfen Platzhalter sein)."""

    agenda: Optional[str] = None
    slides: Optional[str] = None
    minutes: Optional[str] = None


class SessionDescription(BaseModel):
    """Strukturierte Beschreibung aus dem Issue-Text."""

    shortname: str = ""                                   # IRC-Channel, z.B. "#webgpu"
    attendance: Literal["open", "restricted"] = "open"
    materials: Materials = Field(default_factory=Materials)
    goal: Optional[str] = None
    comments: Optional[str] = None


class Session(BaseModel):
    """Repräsentiert eine geplante Breakout-Session."""

    number: int                          # Issue-Nummer
    title: str = ""
    slot: Optional[str] = None           # Slot-Name, z.B. "9:30 - 10:30"
    room: Optional[str] = None           # Raum-Name
    repository: str = ""                 # "w3c/tpac2023-breakouts"
    chairs: list[Chair] = []
    description: SessionDescription = Field(default_factory=SessionDescription)
    # Wird zur Laufzeit gesetzt, sobald der steuernde Bot den Channel verlassen hat
    done: bool = False

    @property
    def channel(self) -> str:
        return self.description.shortname

    @property
    def is_restricted(self) -> bool:
        """True wenn die Logs nur für Mitglieder sichtbar sein dürfen."""
        return self.description.attendance == "restricted"

    @property
    def chair_names(self) -> list[str]:
        return [c.name for c in self.chairs]

    def mark_done(self) -> None:
        """Markiert die Session als abgeschlossen (nur einmal erlaubt)."""
        if self.done:
            raise SessionStateError(f"Session {self.number} ist bereits abgeschlossen.")
        self.done = True
