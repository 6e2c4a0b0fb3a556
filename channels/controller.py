"""Run-Controller: verbindet Sessions, Befehlsplanung und IRC-Treiber.

Zwei Betriebsarten:
- Trockenlauf (only_commands): alle Befehle nur ausgeben, nie verbinden.
- Live-Lauf: einmal verbinden, alle Channels betreten und auf join/part/error
  reagieren, bis jede Session "done" ist; dann trennen.

Alle Arbeit geschieht in Callbacks, die der Treiber aus process_once() heraus
aufruft. Es gibt genau einen Schreiber für "done" (der part-Handler).
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from rich.console import Console

from channels import commands
from channels.commands import CommandKind, IrcCommand
from channels.driver import ChannelDriver, IrcClientDriver
from channels.errors import IrcProtocolError, RunTimeoutError
from channels.grouper import get_channel
from channels.planner import BotRole, CommandPlanner
from config.schema import BreakoutConfig, IrcConfig
from models.project import Project
from models.session import Session

logger = logging.getLogger(__name__)

# Fehlerantwort 443: eingeladener Bot ist schon im Channel
USER_ON_CHANNEL = "useronchannel"


@dataclass(frozen=True)
class RunOptions:
    """Laufweite Parameter; gelten für alle Channels."""

    only_commands: bool = False
    dismiss_bots: bool = False


class Completion:
    """Einmalig auflösbares Abschluss-Signal des Laufs."""

    def __init__(self):
        self._event = threading.Event()

    def resolve(self) -> None:
        if self._event.is_set():
            raise RuntimeError("Abschluss-Signal wurde bereits ausgelöst.")
        self._event.set()

    @property
    def is_resolved(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)


class RunController:
    """Steuert einen Lauf über alle repräsentativen Sessions."""

    def __init__(
        self,
        config: BreakoutConfig,
        project: Project,
        sessions: list[Session],
        options: RunOptions,
        driver_factory: Callable[[IrcConfig], ChannelDriver] = IrcClientDriver,
        console: Optional[Console] = None,
    ):
        self.config = config
        self.project = project
        self.sessions = sessions
        self.options = options
        self.driver_factory = driver_factory
        self.console = console or Console()
        self.planner = CommandPlanner(config, project, dismiss=options.dismiss_bots)
        self.driver: Optional[ChannelDriver] = None
        self.completion = Completion()
        self.trace: list[IrcCommand] = []

    def run(self) -> list[IrcCommand]:
        """Führt den Lauf aus und gibt die ausgegebenen Befehle zurück."""
        if self.options.only_commands:
            return self.dry_run()
        return self.live_run()

    # ─── Trockenlauf ───

    def dry_run(self) -> list[IrcCommand]:
        for session in self.sessions:
            self._session_header(session)
            channel = get_channel(session)
            self._execute(commands.join(channel))
            self.send_channel_bot_commands(channel, self.config.irc.nickname)
            if not self.options.dismiss_bots:
                self.send_channel_bot_commands(channel, self.config.bots.logger_nick)
            self._echo("-----")
        return self.trace

    # ─── Live-Lauf ───

    def live_run(self) -> list[IrcCommand]:
        if not self.sessions:
            logger.info("Keine Sessions – keine Verbindung nötig.")
            return self.trace

        self.console.print("Verbinde mit IRC-Server...")
        self.driver = self.driver_factory(self.config.irc)
        self.driver.on("registered", self._on_registered)
        self.driver.on("join", self._on_join)
        self.driver.on("part", self._on_part)
        self.driver.on("error", self._on_error)
        self.driver.connect()

        timeout = self.config.irc.timeout_seconds
        deadline = time.monotonic() + timeout if timeout else None
        try:
            while not self.completion.is_resolved:
                self.driver.process_once(self.config.irc.poll_interval)
                if deadline is not None and time.monotonic() > deadline:
                    pending = [s.number for s in self.sessions if not s.done]
                    raise RunTimeoutError(
                        f"Zeitlimit von {timeout}s überschritten; offen: "
                        f"{', '.join(str(n) for n in pending)}"
                    )
        finally:
            # Abbruch: Verbindung trotzdem sauber beenden (QUIT)
            if not self.completion.is_resolved:
                self.driver.disconnect()
        logger.info("Alle Channels eingerichtet, Verbindung getrennt.")
        return self.trace

    def _on_registered(self) -> None:
        self.console.print("Verbinde mit IRC-Server... fertig")
        for session in self.sessions:
            self._session_header(session)
            self._execute(commands.join(get_channel(session)))

    def _on_join(self, channel: str, nick: str) -> None:
        self.send_channel_bot_commands(channel, nick)

    def _on_error(self, err: IrcProtocolError) -> None:
        if err.command == USER_ON_CHANNEL and len(err.args_) >= 2:
            # Eingeladener Bot ist schon da: wie ein Beitritt behandeln
            nick, channel = err.args_[0], err.args_[1]
            logger.info(f"{nick} ist bereits in {channel}")
            self.send_channel_bot_commands(channel, nick)
            return
        raise err

    def _on_part(self, channel: str, nick: str) -> None:
        if BotRole.from_nick(nick, self.config) is not BotRole.DRIVER:
            return
        session = self.find_session(channel)
        if session is None or session.done:
            return
        session.mark_done()
        logger.info(f"Session {session.number} ({channel}) abgeschlossen")
        self._echo("-----")
        if all(s.done for s in self.sessions):
            self.driver.disconnect(self.completion.resolve)

    # ─── Befehle ───

    def find_session(self, channel: str) -> Optional[Session]:
        folded = channel.lower()
        return next(
            (s for s in self.sessions if get_channel(s).lower() == folded), None
        )

    def send_channel_bot_commands(self, channel: str, nick: str) -> None:
        """Übergang für (Channel, Nickname) ausführen; Unbekanntes wird ignoriert."""
        session = self.find_session(channel)
        if session is None:
            return
        role = BotRole.from_nick(nick, self.config)
        if role is None:
            logger.debug(f"{nick} in {channel} ignoriert")
            return
        for cmd in self.planner.plan(role, session):
            self._execute(cmd)

    def _execute(self, cmd: IrcCommand) -> None:
        # PART erscheint nicht im Transkript; im Trockenlauf entfällt er ganz
        if cmd.kind is CommandKind.PART:
            if self.driver is not None:
                logger.info(f"Verlasse {cmd.channel}")
                self.driver.part(cmd.channel)
            return

        self._echo(cmd.render())
        self.trace.append(cmd)
        if self.driver is None:
            return
        if cmd.kind is CommandKind.JOIN:
            self.driver.join(cmd.channel)
        elif cmd.kind is CommandKind.TOPIC:
            self.driver.send("TOPIC", cmd.channel, cmd.text)
        elif cmd.kind is CommandKind.INVITE:
            self.driver.send("INVITE", cmd.nick, cmd.channel)
        else:
            self.driver.say(cmd.channel, cmd.text)

    def _session_header(self, session: Session) -> None:
        self.console.print()
        self._echo(f"session {session.number}")
        self._echo("-----")

    def _echo(self, line: str) -> None:
        """Transkript-Zeile unverändert ausgeben (kein Markup, kein Umbruch)."""
        self.console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)
