"""Channel-Einrichtung: Gruppierung, Befehlsplanung, IRC-Treiber, Run-Controller."""

from .errors import (
    BreakoutSetupError,
    ConfigurationError,
    IrcProtocolError,
    RunTimeoutError,
    SessionSelectionError,
)
from .commands import CommandKind, IrcCommand
from .grouper import get_channel, group_sessions_by_channel, representative_sessions
from .planner import BotRole, CommandPlanner
from .controller import Completion, RunController, RunOptions

__all__ = [
    "BreakoutSetupError",
    "ConfigurationError",
    "IrcProtocolError",
    "RunTimeoutError",
    "SessionSelectionError",
    "CommandKind",
    "IrcCommand",
    "get_channel",
    "group_sessions_by_channel",
    "representative_sessions",
    "BotRole",
    "CommandPlanner",
    "Completion",
    "RunController",
    "RunOptions",
]
