"""Projekt-Snapshot laden (YAML oder JSON).

Der Snapshot enthält Sessions, Räume und Slots eines Breakout-Projekts und
liegt unter <data_dir>/<owner>-<number>.yaml bzw. .json. Slots und Räume
dürfen als einfache Strings angegeben werden.
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from channels.errors import ConfigurationError
from models.project import Project

yaml = YAML(typ="safe")

SNAPSHOT_SUFFIXES = (".yaml", ".yml", ".json")


def snapshot_path(owner: str, number: int, data_dir: Union[str, Path]) -> Optional[Path]:
    """Pfad des ersten vorhandenen Snapshots oder None."""
    base = Path(data_dir)
    for suffix in SNAPSHOT_SUFFIXES:
        p = base / f"{owner}-{number}{suffix}"
        if p.exists():
            return p
    return None


def _normalize(raw: dict) -> dict:
    """Erlaubt Kurzformen: "slots: ['9:30 - 10:30']", "rooms: ['Salon A']"."""
    raw = dict(raw)
    raw["slots"] = [
        {"name": s} if isinstance(s, str) else s for s in raw.get("slots") or []
    ]
    raw["rooms"] = [
        {"name": r} if isinstance(r, str) else r for r in raw.get("rooms") or []
    ]
    return raw


def load_project(path: Path, owner: str, number: int) -> Project:
    """Liest und validiert einen Snapshot."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f) if path.suffix == ".json" else yaml.load(f)
    except (json.JSONDecodeError, YAMLError) as e:
        raise ConfigurationError(f"Projekt-Snapshot nicht lesbar: {path}\n{e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Projekt-Snapshot {path}: Mapping erwartet.")
    raw = _normalize(raw)
    raw.setdefault("owner", owner)
    raw.setdefault("number", number)
    try:
        return Project.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Projekt-Snapshot ungültig: {path}\n"
            f"Pydantic-Fehler: {e}"
        ) from e


def fetch_project(
    owner: str,
    number: int,
    data_dir: Union[str, Path] = "projects",
    chairs_to_w3cid: Optional[dict] = None,
) -> Optional[Project]:
    """Projekt owner/number laden; None wenn kein Snapshot existiert."""
    path = snapshot_path(owner, number, data_dir)
    if path is None:
        return None
    project = load_project(path, owner, number)
    if chairs_to_w3cid:
        project.chairs_to_w3cid = dict(chairs_to_w3cid)
    return project
