"""Gruppierung der Sessions nach IRC-Channel."""

from models.project import Project
from models.session import Session


def get_channel(session: Session) -> str:
    """IRC-Channel einer Session (Pflichtfeld "shortname" der Beschreibung)."""
    return session.channel


def group_sessions_by_channel(
    sessions: list[Session], project: Project
) -> dict[str, list[Session]]:
    """Gruppiert Sessions nach Channel, jede Gruppe nach Slot-Position sortiert.

    Sessions mit unbekanntem Slot erhalten Index -1 und stehen vorn.
    Die Sortierung ist stabil: gleiche Slots behalten die Eingabereihenfolge.
    """
    channels: dict[str, list[Session]] = {}
    for session in sessions:
        channels.setdefault(get_channel(session), []).append(session)
    for group in channels.values():
        group.sort(key=lambda s: project.slot_index(s.slot))
    return channels


def representative_sessions(channels: dict[str, list[Session]]) -> list[Session]:
    """Erste (früheste) Session jeder Gruppe; nur diese werden kommandiert."""
    return [group[0] for group in channels.values() if group]
