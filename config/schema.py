from pydantic import BaseModel, Field, field_validator
from typing import Optional, Union


# Platzhalter, die in Agenda- und Slides-Feldern "noch offen" bedeuten
DEFAULT_TODO_STRINGS = ("TODO", "TBD", "TBC", "TBA", "todo", "tbd", "tbc", "tba", "@@")

DEFAULT_AGENDA_ITEMS = (
    "Pick a scribe",
    "Reminders: code of conduct, health policies, recorded session policy",
    "Goal of this session",
    "Discussion",
    "Next steps / where discussion continues",
)


# ─── PROJEKT (Sessions-Quelle) ───

class ProjectConfig(BaseModel):
    """Woher die Breakout-Sessions kommen."""
    # GitHub-Organisation bzw. -Nutzer, dem das Projekt gehört (z.B. "w3c")
    owner: Optional[str] = Field(None,
        description="Besitzer des Projekts (PROJECT_OWNER)")
    # Projektnummer auf GitHub (z.B. 40)
    number: Optional[int] = Field(None, ge=1,
        description="Projektnummer (PROJECT_NUMBER)")
    # Verzeichnis mit Projekt-Snapshots "<owner>-<number>.yaml"
    data_dir: str = Field("projects",
        description="Verzeichnis mit Projekt-Snapshots")
    # Zuordnung Chair-Name/Login → W3C-ID (CHAIR_W3CID)
    chairs_to_w3cid: dict[str, Union[int, str]] = Field(default_factory=dict,
        description="Chair → W3C-ID")

    @property
    def is_complete(self) -> bool:
        """True wenn Besitzer und Nummer gesetzt sind."""
        return bool(self.owner) and self.number is not None


# ─── IRC-SERVER ───

class IrcConfig(BaseModel):
    """Verbindung des steuernden Bots zum IRC-Server."""
    # Hostname des IRC-Servers
    server: str = Field("irc.w3.org",
        description="IRC-Server")
    # Port (Klartext-IRC)
    port: int = Field(6667, ge=1, le=65535,
        description="IRC-Port")
    # Nickname des steuernden Bots
    nickname: str = Field("tpac-breakout-bot",
        description="Nickname des steuernden Bots")
    # Optionaler Username/Realname (Default: Nickname)
    username: Optional[str] = None
    realname: Optional[str] = None
    # Maximale Laufzeit des Live-Laufs in Sekunden (0 = kein Limit)
    timeout_seconds: int = Field(0, ge=0,
        description="Maximale Laufzeit (0=kein Limit)")
    # Wartezeit pro Reactor-Durchlauf in Sekunden
    poll_interval: float = Field(0.2, gt=0, le=5,
        description="Wartezeit pro Reactor-Durchlauf")


# ─── BOTS ───

class BotConfig(BaseModel):
    """Nicknames der eingeladenen Bots."""
    # Protokoll-Bot (Minutes)
    logger_nick: str = Field("RRSAgent",
        description="Protokoll-Bot")
    # Zeit-/Agenda-Bot
    timer_nick: str = Field("Zakim",
        description="Zeit-Bot")


# ─── GESAMT-CONFIG ───

class BreakoutConfig(BaseModel):
    """Gesamtkonfiguration der Breakout-Channel-Einrichtung."""
    # Projekt mit den Sessions
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    # IRC-Verbindung
    irc: IrcConfig = Field(default_factory=IrcConfig)
    # Eingeladene Bots
    bots: BotConfig = Field(default_factory=BotConfig)
    # Präfix des Channel-Topics
    topic_prefix: str = Field("TPAC breakout",
        description="Präfix des Channel-Topics")
    # Platzhalter, die als "nicht ausgefüllt" gelten (Agenda, Slides)
    todo_strings: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TODO_STRINGS),
        description="Platzhalter für nicht ausgefüllte Links")
    # Feste Agenda-Punkte, die Zakim per "agenda+" erhält
    agenda_items: list[str] = Field(
        default_factory=lambda: list(DEFAULT_AGENDA_ITEMS),
        description="Feste Agenda-Punkte")

    @field_validator("todo_strings")
    @classmethod
    def strip_todo_strings(cls, v: list[str]) -> list[str]:
        return [s.strip() for s in v if s.strip()]
