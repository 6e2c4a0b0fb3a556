"""Datenmodell für einen Zeitslot im Konferenzraster."""

from pydantic import BaseModel, ConfigDict


class Slot(BaseModel):
    """Repräsentiert einen Zeitslot (z.B. "9:30 - 10:30").

    Immutable (frozen=True), damit er als Dict-Key / Set-Element nutzbar ist.
    Die Reihenfolge der Slots im Projekt bestimmt die Sortierung.
    """

    model_config = ConfigDict(frozen=True)

    name: str

    def __str__(self) -> str:
        return self.name
