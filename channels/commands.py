"""IRC-Befehle als Werte: planen, ausgeben, ausführen."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandKind(str, Enum):
    JOIN = "join"
    PART = "part"
    TOPIC = "topic"
    INVITE = "invite"
    SAY = "say"


@dataclass(frozen=True)
class IrcCommand:
    """Ein einzelner IRC-Befehl für einen Channel.

    Immutable, damit geplante Sequenzen in Tests direkt verglichen werden können.
    """

    kind: CommandKind
    channel: str
    # Topic-Text bzw. Nachricht (TOPIC, SAY)
    text: Optional[str] = None
    # Eingeladener Nickname (INVITE)
    nick: Optional[str] = None

    def render(self) -> str:
        """Konsolen-Form, wie man den Befehl in einem IRC-Client tippen würde."""
        if self.kind is CommandKind.JOIN:
            return f"/join {self.channel}"
        if self.kind is CommandKind.PART:
            return f"/part {self.channel}"
        if self.kind is CommandKind.TOPIC:
            return f"/topic {self.channel} {self.text}"
        if self.kind is CommandKind.INVITE:
            return f"/invite {self.nick} {self.channel}"
        return f"/msg {self.channel} {self.text}"

    def __str__(self) -> str:
        return self.render()


# ─── Konstruktoren ───

def join(channel: str) -> IrcCommand:
    return IrcCommand(CommandKind.JOIN, channel)


def part(channel: str) -> IrcCommand:
    return IrcCommand(CommandKind.PART, channel)


def topic(channel: str, text: str) -> IrcCommand:
    return IrcCommand(CommandKind.TOPIC, channel, text=text)


def invite(channel: str, nick: str) -> IrcCommand:
    return IrcCommand(CommandKind.INVITE, channel, nick=nick)


def say(channel: str, text: str) -> IrcCommand:
    return IrcCommand(CommandKind.SAY, channel, text=text)
