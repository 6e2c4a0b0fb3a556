"""IRC-Treiber: dünne Schicht über irc.client (jaraco/irc).

Der Controller kennt nur das ChannelDriver-Protokoll; Tests ersetzen den
Treiber durch eine Attrappe, die Ereignisse direkt auslöst.

Ereignisse:
    registered()            Server hat die Anmeldung bestätigt (001)
    join(channel, nick)     jemand (auch wir selbst) ist beigetreten
    part(channel, nick)     jemand hat den Channel verlassen
    error(err)              Fehlerantwort 4xx/5xx oder ERROR vom Server
"""

import logging
from typing import Callable, Optional, Protocol

import irc.client
import irc.events

from channels.errors import ConfigurationError, IrcProtocolError
from config.schema import IrcConfig

logger = logging.getLogger(__name__)

EVENTS = ("registered", "join", "part", "error")

# Alle numerischen Fehlerantworten (ERR_*), z.B. "useronchannel" (443)
ERROR_REPLIES = tuple(
    name for code, name in irc.events.numeric.items() if 400 <= int(code) < 600
)


class ChannelDriver(Protocol):
    def connect(self) -> None: ...
    def join(self, channel: str) -> None: ...
    def part(self, channel: str) -> None: ...
    def send(self, command: str, *args: str) -> None: ...
    def say(self, channel: str, text: str) -> None: ...
    def disconnect(self, callback: Optional[Callable[[], None]] = None) -> None: ...
    def on(self, event: str, handler: Callable) -> None: ...
    def process_once(self, timeout: float) -> None: ...


class IrcClientDriver:
    """ChannelDriver auf Basis von irc.client.Reactor (ein Server, ein Nickname)."""

    def __init__(self, config: IrcConfig, reactor: Optional[irc.client.Reactor] = None):
        self.config = config
        self.reactor = reactor or irc.client.Reactor()
        self.connection: Optional[irc.client.ServerConnection] = None
        self._handlers: dict[str, list[Callable]] = {e: [] for e in EVENTS}

        self.reactor.add_global_handler("welcome", self._on_welcome)
        self.reactor.add_global_handler("join", self._on_join)
        self.reactor.add_global_handler("part", self._on_part)
        self.reactor.add_global_handler("error", self._on_server_error)
        for name in ERROR_REPLIES:
            self.reactor.add_global_handler(name, self._on_error_reply)

    # ─── Ereignisse ───

    def on(self, event: str, handler: Callable) -> None:
        if event not in self._handlers:
            raise ValueError(f"Unbekanntes Ereignis: {event}")
        self._handlers[event].append(handler)

    def _emit(self, event: str, *args) -> None:
        for handler in self._handlers[event]:
            handler(*args)

    def _on_welcome(self, connection, event) -> None:
        logger.info(f"Angemeldet bei {self.config.server} als {connection.get_nickname()}")
        self._emit("registered")

    def _on_join(self, connection, event) -> None:
        self._emit("join", event.target, event.source.nick)

    def _on_part(self, connection, event) -> None:
        self._emit("part", event.target, event.source.nick)

    def _on_error_reply(self, connection, event) -> None:
        self._emit("error", IrcProtocolError(event.type, event.arguments))

    def _on_server_error(self, connection, event) -> None:
        self._emit("error", IrcProtocolError("error", [event.target or ""]))

    # ─── Befehle ───

    def connect(self) -> None:
        cfg = self.config
        logger.info(f"Verbinde mit {cfg.server}:{cfg.port} als {cfg.nickname}")
        try:
            self.connection = self.reactor.server().connect(
                cfg.server,
                cfg.port,
                cfg.nickname,
                username=cfg.username or cfg.nickname,
                ircname=cfg.realname or cfg.nickname,
            )
        except irc.client.ServerConnectionError as e:
            raise ConfigurationError(
                f"Verbindung zu {cfg.server}:{cfg.port} fehlgeschlagen: {e}"
            ) from e

    def join(self, channel: str) -> None:
        self._conn().join(channel)

    def part(self, channel: str) -> None:
        self._conn().part(channel)

    def send(self, command: str, *args: str) -> None:
        conn = self._conn()
        if command == "TOPIC":
            channel, text = args
            conn.topic(channel, text)
        elif command == "INVITE":
            nick, channel = args
            conn.invite(nick, channel)
        else:
            conn.send_items(command, *args)

    def say(self, channel: str, text: str) -> None:
        self._conn().privmsg(channel, text)

    def disconnect(self, callback: Optional[Callable[[], None]] = None) -> None:
        if self.connection is not None and self.connection.is_connected():
            self.connection.disconnect("Breakout channels ready")
        if callback is not None:
            callback()

    def process_once(self, timeout: float) -> None:
        self.reactor.process_once(timeout)

    def _conn(self) -> irc.client.ServerConnection:
        if self.connection is None:
            raise RuntimeError("IRC-Treiber ist nicht verbunden.")
        return self.connection
