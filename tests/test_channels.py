"""Tests für Channel-Gruppierung, Befehle und Befehlsplanung."""

import pytest

from channels import commands
from channels.commands import CommandKind, IrcCommand
from channels.grouper import get_channel, group_sessions_by_channel, representative_sessions
from channels.planner import BotRole, CommandPlanner
from config.schema import BotConfig, BreakoutConfig, IrcConfig
from models.project import Project
from models.room import Room
from models.session import Chair, Materials, Session, SessionDescription
from models.slot import Slot


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _make_session(number: int = 1, channel: str = "#breakout-1", slot: str = "9:30",
                  room=None, attendance: str = "open", agenda=None, slides=None,
                  chairs=("Alice",)) -> Session:
    return Session(
        number=number,
        title=f"Session {number}",
        slot=slot,
        room=room,
        repository="w3c/breakouts",
        chairs=[Chair(name=c) for c in chairs],
        description=SessionDescription(
            shortname=channel,
            attendance=attendance,
            materials=Materials(agenda=agenda, slides=slides),
        ),
    )


def _make_project(sessions=(), rooms=()) -> Project:
    return Project(
        owner="w3c",
        number=40,
        sessions=list(sessions),
        rooms=list(rooms),
        slots=[Slot(name="9:30"), Slot(name="11:00"), Slot(name="14:00")],
    )


def _texts(cmds: list[IrcCommand]) -> list[str]:
    return [c.text for c in cmds if c.kind is CommandKind.SAY]


# ─── BEFEHLE ──────────────────────────────────────────────────────────────────

class TestIrcCommand:
    def test_render(self):
        assert commands.join("#c").render() == "/join #c"
        assert commands.part("#c").render() == "/part #c"
        assert commands.topic("#c", "Ein Topic").render() == "/topic #c Ein Topic"
        assert commands.invite("#c", "Zakim").render() == "/invite Zakim #c"
        assert commands.say("#c", "Hallo Welt").render() == "/msg #c Hallo Welt"

    def test_commands_are_values(self):
        assert commands.say("#c", "x") == commands.say("#c", "x")
        assert commands.say("#c", "x") != commands.say("#d", "x")
        assert str(commands.join("#c")) == "/join #c"


# ─── GRUPPIERUNG ──────────────────────────────────────────────────────────────

class TestGrouper:
    def test_get_channel(self):
        assert get_channel(_make_session(channel="#webgpu")) == "#webgpu"

    def test_groups_by_channel(self):
        sessions = [
            _make_session(1, "#a"), _make_session(2, "#b"), _make_session(3, "#a", slot="11:00"),
        ]
        groups = group_sessions_by_channel(sessions, _make_project(sessions))
        assert list(groups) == ["#a", "#b"]
        assert [s.number for s in groups["#a"]] == [1, 3]
        assert [s.number for s in groups["#b"]] == [2]

    def test_sorted_by_slot_position(self):
        """Die früheste Session eines Channels steht vorn, nicht die kleinste Nummer."""
        sessions = [
            _make_session(1, "#a", slot="14:00"),
            _make_session(2, "#a", slot="9:30"),
            _make_session(3, "#a", slot="11:00"),
        ]
        groups = group_sessions_by_channel(sessions, _make_project(sessions))
        assert [s.number for s in groups["#a"]] == [2, 3, 1]

    def test_unknown_slot_sorts_first(self):
        sessions = [_make_session(1, "#a", slot="9:30"), _make_session(2, "#a", slot="23:00")]
        groups = group_sessions_by_channel(sessions, _make_project(sessions))
        assert [s.number for s in groups["#a"]] == [2, 1]

    def test_representatives(self):
        """Nur die früheste Session pro Channel wird kommandiert."""
        sessions = [
            _make_session(1, "#a", slot="11:00"),
            _make_session(2, "#b"),
            _make_session(3, "#a", slot="9:30"),
        ]
        groups = group_sessions_by_channel(sessions, _make_project(sessions))
        reps = representative_sessions(groups)
        assert [s.number for s in reps] == [3, 2]

    def test_empty(self):
        assert group_sessions_by_channel([], _make_project()) == {}
        assert representative_sessions({}) == []


# ─── ROLLEN ───────────────────────────────────────────────────────────────────

class TestBotRole:
    def test_from_nick(self):
        config = BreakoutConfig()
        assert BotRole.from_nick("tpac-breakout-bot", config) is BotRole.DRIVER
        assert BotRole.from_nick("RRSAgent", config) is BotRole.LOGGER
        assert BotRole.from_nick("Zakim", config) is BotRole.TIMER
        assert BotRole.from_nick("alice", config) is None

    def test_from_nick_case_insensitive(self):
        config = BreakoutConfig()
        assert BotRole.from_nick("rrsagent", config) is BotRole.LOGGER
        assert BotRole.from_nick("ZAKIM", config) is BotRole.TIMER

    def test_from_nick_uses_config(self):
        config = BreakoutConfig(
            irc=IrcConfig(nickname="my-bot"),
            bots=BotConfig(logger_nick="Logger", timer_nick="Timer"),
        )
        assert BotRole.from_nick("my-bot", config) is BotRole.DRIVER
        assert BotRole.from_nick("Logger", config) is BotRole.LOGGER
        assert BotRole.from_nick("RRSAgent", config) is None


# ─── BEFEHLSPLANUNG ───────────────────────────────────────────────────────────

class TestDriverPlan:
    def test_setup_topic_and_invites(self):
        session = _make_session(room="salon-a")
        project = _make_project([session], rooms=[Room(name="salon-a", label="Salon A")])
        cmds = CommandPlanner(BreakoutConfig(), project).plan(BotRole.DRIVER, session)
        assert cmds == [
            commands.topic("#breakout-1", "TPAC breakout: Session 1 - Salon A - 9:30"),
            commands.invite("#breakout-1", "RRSAgent"),
            commands.invite("#breakout-1", "Zakim"),
        ]

    def test_topic_without_room(self):
        session = _make_session(room="unbekannt")
        planner = CommandPlanner(BreakoutConfig(), _make_project([session]))
        assert planner.topic_text(session) == "TPAC breakout: Session 1 - 9:30"

    def test_topic_prefix_from_config(self):
        session = _make_session()
        planner = CommandPlanner(BreakoutConfig(topic_prefix="Breakout"), _make_project([session]))
        assert planner.topic_text(session).startswith("Breakout: Session 1")

    def test_dismiss(self):
        session = _make_session()
        cmds = CommandPlanner(BreakoutConfig(), _make_project([session]), dismiss=True).plan(
            BotRole.DRIVER, session
        )
        assert cmds == [
            commands.say("#breakout-1", "RRSAgent, draft minutes"),
            commands.say("#breakout-1", "RRSAgent, bye"),
            commands.say("#breakout-1", "Zakim, bye"),
            commands.part("#breakout-1"),
        ]

    def test_dismiss_never_sets_topic_or_invites(self):
        session = _make_session()
        cmds = CommandPlanner(BreakoutConfig(), _make_project([session]), dismiss=True).plan(
            BotRole.DRIVER, session
        )
        kinds = {c.kind for c in cmds}
        assert CommandKind.TOPIC not in kinds
        assert CommandKind.INVITE not in kinds

    def test_setup_never_dismisses(self):
        session = _make_session()
        planner = CommandPlanner(BreakoutConfig(), _make_project([session]))
        texts = _texts(planner.plan(BotRole.DRIVER, session) + planner.plan(BotRole.LOGGER, session))
        assert not any("draft minutes" in t for t in texts)
        assert not any(t.endswith(", bye") for t in texts)


class TestLoggerPlan:
    def _plan(self, session: Session, **config) -> list[IrcCommand]:
        planner = CommandPlanner(BreakoutConfig(**config), _make_project([session]))
        return planner.plan(BotRole.LOGGER, session)

    def test_full_sequence(self):
        session = _make_session(chairs=("Alice", "Bob"))
        cmds = self._plan(session)
        assert _texts(cmds) == [
            "RRSAgent, do not leave",
            "RRSAgent, make logs public",
            "Meeting: Session 1",
            "Chair: Alice, Bob",
            "Agenda: https://github.com/w3c/breakouts/issues/1",
            "clear agenda",
            "agenda+ Pick a scribe",
            "agenda+ Reminders: code of conduct, health policies, recorded session policy",
            "agenda+ Goal of this session",
            "agenda+ Discussion",
            "agenda+ Next steps / where discussion continues",
        ]
        assert cmds[-1] == commands.part("#breakout-1")

    def test_restricted_logs_member(self):
        texts = _texts(self._plan(_make_session(attendance="restricted")))
        assert "RRSAgent, make logs member" in texts

    def test_open_logs_public(self):
        texts = _texts(self._plan(_make_session(attendance="open")))
        assert "RRSAgent, make logs public" in texts

    @pytest.mark.parametrize("agenda", [None, "", "TBD", "@@", "TODO"])
    def test_placeholder_agenda_uses_issue(self, agenda):
        texts = _texts(self._plan(_make_session(number=12, agenda=agenda)))
        assert "Agenda: https://github.com/w3c/breakouts/issues/12" in texts

    def test_explicit_agenda_verbatim(self):
        texts = _texts(self._plan(_make_session(agenda="https://example.org/agenda")))
        assert "Agenda: https://example.org/agenda" in texts
        assert not any("issues/" in t for t in texts)

    def test_slides_only_when_real(self):
        with_slides = _texts(self._plan(_make_session(slides="https://example.org/slides")))
        assert "Slideset: https://example.org/slides" in with_slides
        for placeholder in (None, "TBD"):
            texts = _texts(self._plan(_make_session(slides=placeholder)))
            assert not any(t.startswith("Slideset:") for t in texts)

    def test_custom_todo_strings(self):
        texts = _texts(self._plan(_make_session(agenda="offen"), todo_strings=["offen"]))
        assert "Agenda: https://github.com/w3c/breakouts/issues/1" in texts

    def test_same_in_dismiss_mode(self):
        session = _make_session()
        setup = CommandPlanner(BreakoutConfig(), _make_project([session])).plan(BotRole.LOGGER, session)
        dismiss = CommandPlanner(BreakoutConfig(), _make_project([session]), dismiss=True).plan(
            BotRole.LOGGER, session
        )
        assert setup == dismiss


class TestTimerPlan:
    @pytest.mark.parametrize("dismiss", [False, True])
    def test_no_commands(self, dismiss):
        session = _make_session()
        planner = CommandPlanner(BreakoutConfig(), _make_project([session]), dismiss=dismiss)
        assert planner.plan(BotRole.TIMER, session) == []

    def test_every_role_has_handler(self):
        session = _make_session()
        planner = CommandPlanner(BreakoutConfig(), _make_project([session]))
        for role in BotRole:
            assert isinstance(planner.plan(role, session), list)
