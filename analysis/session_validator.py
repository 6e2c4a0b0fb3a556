"""Prüfung einzelner Sessions vor der Channel-Einrichtung.

Sessions mit Fehlern (severity "error") werden vom Lauf ausgeschlossen,
Warnungen werden nur angezeigt.
"""

import re
from typing import Literal

from pydantic import BaseModel

from config.schema import DEFAULT_TODO_STRINGS
from models.project import Project

# IRC-Channelnamen: keine Leerzeichen, Kommas oder Ctrl-G, max. 50 Zeichen
_CHANNEL_RE = re.compile(r"^[^\s,\x07]{1,50}$")


class ValidationViolation(BaseModel):
    """Ein einzelnes Problem einer Session."""

    severity: Literal["error", "warning"]
    check: str          # z.B. "irc_channel"
    message: str


class ValidationReport(BaseModel):
    """Ergebnis der Prüfung einer Session."""

    number: int
    violations: list[ValidationViolation]

    @property
    def errors(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "error"]

    @property
    def is_valid(self) -> bool:
        """True wenn keine Errors (Warnings ok)."""
        return not self.errors

    def print_rich(self, console=None) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = console or Console()
        if not self.violations:
            console.print(f"[dim]Session {self.number}: keine Probleme gefunden.[/dim]")
            return

        table = Table(title=f"Session {self.number}", box=box.ROUNDED)
        table.add_column("Typ", width=8)
        table.add_column("Prüfung", width=16)
        table.add_column("Beschreibung")
        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(f"[{color}]{v.severity.upper()}[/{color}]", v.check, v.message)
        console.print(table)


def validate_session(
    number: int, project: Project, todo_strings=DEFAULT_TODO_STRINGS
) -> list[ValidationViolation]:
    """Prüft Session `number` gegen das Projekt.

    Fehler:
    1. Session existiert nicht
    2. Titel, Repository oder Chairs fehlen
    3. IRC-Channel fehlt oder ist kein gültiger Channelname

    Warnungen: Slot nicht im Raster, unbekannter Raum, Chair ohne W3C-ID,
    Agenda/Slides als Platzhalter.
    """
    violations: list[ValidationViolation] = []

    def error(check: str, message: str) -> None:
        violations.append(ValidationViolation(severity="error", check=check, message=message))

    def warning(check: str, message: str) -> None:
        violations.append(ValidationViolation(severity="warning", check=check, message=message))

    session = project.find_session(number)
    if session is None:
        error("unknown_session", f"Session {number} existiert nicht im Projekt.")
        return violations

    if not session.title.strip():
        error("title", "Titel fehlt.")
    if not session.repository:
        error("repository", "Repository fehlt (für den Agenda-Link benötigt).")
    if not session.chairs:
        error("chairs", "Keine Chairs angegeben.")

    channel = session.description.shortname
    if not channel:
        error("irc_channel", "IRC-Channel (shortname) fehlt.")
    elif not _CHANNEL_RE.match(channel):
        error("irc_channel", f"Ungültiger IRC-Channel: '{channel}'.")
    elif not channel.startswith(("#", "&")):
        warning("irc_channel", f"IRC-Channel '{channel}' beginnt nicht mit #.")

    if session.slot and project.slot_index(session.slot) < 0:
        warning("slot", f"Slot '{session.slot}' ist nicht im Raster des Projekts; "
                         "wird zuerst einsortiert.")

    if session.room and project.find_room(session.room) is None:
        warning("room", f"Raum '{session.room}' ist unbekannt; Topic ohne Raumangabe.")

    for chair in session.chairs:
        if chair.w3c_id is None and project.chair_w3cid(chair.name, chair.login) is None:
            warning("chair_w3cid", f"Keine W3C-ID für Chair '{chair.name}'.")

    materials = session.description.materials
    if materials.agenda in todo_strings:
        warning("agenda", "Agenda ist noch ein Platzhalter; Issue-Link wird verwendet.")
    if materials.slides in todo_strings:
        warning("slides", "Slides sind noch ein Platzhalter; kein Slideset-Eintrag.")

    return violations
