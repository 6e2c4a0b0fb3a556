"""Datenmodell für einen Raum (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, model_validator


class Room(BaseModel):
    """Repräsentiert einen Sitzungsraum."""

    name: str                     # Interner Name, wie er in der Session steht
    label: Optional[str] = None   # Anzeigename für das Topic ("Salon A (Level 2)")

    @model_validator(mode='after')
    def _default_label(self):
        if not self.label:
            self.label = self.name
        return self
