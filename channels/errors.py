"""Fehlerklassen der Channel-Einrichtung."""

from typing import Optional, Sequence


class BreakoutSetupError(Exception):
    """Basisklasse aller fachlichen Fehler eines Laufs."""


class ConfigurationError(BreakoutSetupError):
    """Konfiguration unvollständig oder Projekt nicht abrufbar."""


class SessionSelectionError(BreakoutSetupError):
    """Angeforderte Session fehlt, hat keinen Slot oder ist ungültig."""

    def __init__(self, message: str, number: Optional[int] = None):
        super().__init__(message)
        self.number = number


class IrcProtocolError(BreakoutSetupError):
    """Fehlerantwort des IRC-Servers, die nicht lokal behandelt wird."""

    def __init__(self, command: str, args: Sequence[str] = ()):
        self.command = command
        self.args_ = list(args)
        detail = " ".join(self.args_)
        super().__init__(f"IRC-Fehler {command}" + (f": {detail}" if detail else ""))


class RunTimeoutError(BreakoutSetupError):
    """Live-Lauf hat das konfigurierte Zeitlimit überschritten."""
