"""Auswahl der Sessions eines Laufs: Slot/Nummer filtern, ungültige aussortieren."""

from typing import Callable, Optional

from pydantic import BaseModel
from rich.console import Console

from analysis.session_validator import ValidationReport, ValidationViolation, validate_session
from channels.errors import SessionSelectionError
from models.project import Project
from models.session import Session

Validator = Callable[[int, Project], list[ValidationViolation]]


class SelectionReport(BaseModel):
    """Ergebnis der Session-Auswahl."""

    number: Optional[int] = None
    slot: Optional[str] = None
    found: list[int]
    valid: list[int]
    rejected: list[ValidationReport] = []
    sessions: list[Session]

    def print_rich(self, console: Optional[Console] = None) -> None:
        console = console or Console()
        found = ", ".join(str(n) for n in self.found)
        valid = ", ".join(str(n) for n in self.valid)
        if self.number is None:
            where = f"im Slot {self.slot}" if self.slot else "mit Slot"
            console.print(f"- {len(self.found)} Sessions {where} gefunden: {found}")
            console.print(f"- davon {len(self.valid)} gültig: {valid}")
        for report in self.rejected:
            report.print_rich(console)


def select_sessions(
    project: Project,
    number: Optional[int] = None,
    slot: Optional[str] = None,
    validator: Optional[Validator] = None,
) -> SelectionReport:
    """Wählt die Sessions des Laufs aus.

    1. Nur Sessions mit Slot; optional gefiltert nach Nummer und Slot-Beginn
    2. Sortiert nach Nummer
    3. Sessions mit Fehlern (severity "error") werden verworfen

    Wurde eine bestimmte Nummer angefordert, ist jedes Verwerfen ein Fehler.
    """
    validator = validator or validate_session
    candidates = [
        s for s in project.sessions
        if s.slot
        and (number is None or s.number == number)
        and (slot is None or s.slot.startswith(slot))
    ]
    candidates.sort(key=lambda s: s.number)

    if number is not None and not candidates:
        raise SessionSelectionError(
            f"Session {number} nicht im Projekt {project.owner}/{project.number} gefunden "
            f"oder nicht dem angeforderten Slot zugeordnet",
            number=number,
        )

    valid: list[Session] = []
    rejected: list[ValidationReport] = []
    for session in candidates:
        violations = validator(session.number, project)
        report = ValidationReport(number=session.number, violations=violations)
        if report.is_valid:
            valid.append(session)
        else:
            rejected.append(report)

    if number is not None and not valid:
        raise SessionSelectionError(
            f"Session {number} enthält Fehler, die behoben werden müssen", number=number
        )

    return SelectionReport(
        number=number,
        slot=slot,
        found=[s.number for s in candidates],
        valid=[s.number for s in valid],
        rejected=rejected,
        sessions=valid,
    )
