"""Befehlsplanung pro Channel: welcher Bot ist beigetreten, was ist zu tun.

Zustandsübergänge (ausgelöst durch "Nickname ist Channel beigetreten"):

    Rolle    | Einrichten                         | Verabschieden (dismiss)
    ---------+------------------------------------+-----------------------------------
    DRIVER   | Topic, RRSAgent + Zakim einladen   | Minutes, beide Bots "bye", PART
    LOGGER   | Protokoll-Metadaten, Agenda, PART  | (wie Einrichten)
    TIMER    | nichts                             | nichts
"""

import logging
from enum import Enum
from typing import Callable, Optional

from channels import commands
from channels.commands import IrcCommand
from channels.grouper import get_channel
from config.schema import BreakoutConfig
from models.project import Project
from models.session import Session

logger = logging.getLogger(__name__)


class BotRole(str, Enum):
    DRIVER = "driver"   # der steuernde Bot selbst
    LOGGER = "logger"   # RRSAgent
    TIMER = "timer"     # Zakim

    @classmethod
    def from_nick(cls, nick: str, config: BreakoutConfig) -> Optional["BotRole"]:
        """Rolle eines Nicknames; None für alle anderen Teilnehmer."""
        folded = nick.lower()
        if folded == config.irc.nickname.lower():
            return cls.DRIVER
        if folded == config.bots.logger_nick.lower():
            return cls.LOGGER
        if folded == config.bots.timer_nick.lower():
            return cls.TIMER
        return None


class CommandPlanner:
    """Erzeugt die Befehlsfolge für (Rolle, Session).

    dismiss gilt für den ganzen Lauf, nicht pro Channel.
    """

    def __init__(self, config: BreakoutConfig, project: Project, dismiss: bool = False):
        self.config = config
        self.project = project
        self.dismiss = dismiss
        self._handlers: dict[BotRole, Callable[[Session], list[IrcCommand]]] = {
            BotRole.DRIVER: self._plan_driver,
            BotRole.LOGGER: self._plan_logger,
            BotRole.TIMER: self._plan_timer,
        }

    def plan(self, role: BotRole, session: Session) -> list[IrcCommand]:
        cmds = self._handlers[role](session)
        logger.debug(f"{get_channel(session)}: {role.value} → {len(cmds)} Befehle")
        return cmds

    # ─── Hilfen ───

    def is_placeholder(self, value: Optional[str]) -> bool:
        """True wenn der Link fehlt oder nur ein Platzhalter ("TBD", ...) ist."""
        return not value or value in self.config.todo_strings

    def topic_text(self, session: Session) -> str:
        return (
            f"{self.config.topic_prefix}: {session.title} "
            f"{self.project.room_label(session)}- {session.slot}"
        )

    def agenda_url(self, session: Session) -> str:
        agenda = session.description.materials.agenda
        if not self.is_placeholder(agenda):
            return agenda
        return f"https://github.com/{session.repository}/issues/{session.number}"

    # ─── Rollen ───

    def _plan_driver(self, session: Session) -> list[IrcCommand]:
        channel = get_channel(session)
        rrsagent = self.config.bots.logger_nick
        zakim = self.config.bots.timer_nick
        if self.dismiss:
            return [
                commands.say(channel, f"{rrsagent}, draft minutes"),
                commands.say(channel, f"{rrsagent}, bye"),
                commands.say(channel, f"{zakim}, bye"),
                commands.part(channel),
            ]
        return [
            commands.topic(channel, self.topic_text(session)),
            commands.invite(channel, rrsagent),
            commands.invite(channel, zakim),
        ]

    def _plan_logger(self, session: Session) -> list[IrcCommand]:
        channel = get_channel(session)
        rrsagent = self.config.bots.logger_nick
        materials = session.description.materials
        visibility = "member" if session.is_restricted else "public"

        lines = [
            f"{rrsagent}, do not leave",
            f"{rrsagent}, make logs {visibility}",
            f"Meeting: {session.title}",
            f"Chair: {', '.join(session.chair_names)}",
            f"Agenda: {self.agenda_url(session)}",
        ]
        if not self.is_placeholder(materials.slides):
            lines.append(f"Slideset: {materials.slides}")
        lines.append("clear agenda")
        lines.extend(f"agenda+ {item}" for item in self.config.agenda_items)

        cmds = [commands.say(channel, line) for line in lines]
        cmds.append(commands.part(channel))
        return cmds

    def _plan_timer(self, session: Session) -> list[IrcCommand]:
        # Zakim braucht beim Beitritt keine Befehle
        return []
