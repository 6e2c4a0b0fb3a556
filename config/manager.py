"""Konfigurationsmanager: Laden, Speichern und Umgebungs-Overrides.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
Reihenfolge: Defaults → YAML-Datei → Umgebungsvariablen.
"""

import json
import os
from datetime import date
from pathlib import Path
from typing import Mapping, Optional

from rich.console import Console
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from channels.errors import ConfigurationError
from config.defaults import ENV_OVERRIDES, default_breakout_config
from config.schema import BreakoutConfig

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Breakout-IRC — Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "project": (
        "Projekt",
        "Snapshot wird aus <data_dir>/<owner>-<number>.yaml gelesen.",
    ),
    "irc": (
        "IRC-Server",
        "timeout_seconds: 0 = kein Limit.",
    ),
    "bots": (
        "Bots",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "breakout.yaml"

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> BreakoutConfig:
        """Lade Config aus YAML (falls vorhanden) und wende Umgebungs-Overrides an."""
        target = path or self.DEFAULT_CONFIG
        if target.exists():
            raw = self._read_yaml(target)
        elif path is not None:
            raise ConfigurationError(f"Konfigurationsdatei nicht gefunden: {target}")
        else:
            raw = json.loads(default_breakout_config().model_dump_json())

        self._apply_env(raw)
        try:
            return BreakoutConfig.model_validate(raw)
        except Exception as e:
            raise ConfigurationError(
                f"Konfiguration ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def _read_yaml(self, target: Path) -> dict:
        try:
            with open(target, "r", encoding="utf-8") as f:
                raw = yaml.load(f)
        except YAMLError as e:
            raise ConfigurationError(f"YAML-Fehler in {target}: {e}") from e
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ConfigurationError(f"{target}: Wurzelelement muss ein Mapping sein.")
        return json.loads(json.dumps(raw))

    def _apply_env(self, raw: dict) -> None:
        """Überschreibt Felder mit Werten aus der Umgebung (siehe ENV_OVERRIDES)."""
        for var, (section, field) in ENV_OVERRIDES.items():
            value = self.environ.get(var)
            if value is None or value == "":
                continue
            if var == "CHAIR_W3CID":
                try:
                    value = json.loads(value)
                except json.JSONDecodeError as e:
                    raise ConfigurationError(
                        f"{var} muss ein JSON-Objekt sein: {e}"
                    ) from e
            raw.setdefault(section, {})[field] = value

    def require_project(self, config: BreakoutConfig) -> None:
        """Bricht ab, wenn das Projekt nicht eindeutig festgelegt ist."""
        if config.project.is_complete:
            return
        if not config.project.owner:
            raise ConfigurationError(
                "Projekt-Besitzer fehlt (PROJECT_OWNER oder project.owner setzen)."
            )
        if config.project.number is None:
            raise ConfigurationError(
                "Projektnummer fehlt (PROJECT_NUMBER oder project.number setzen)."
            )

    # ─── Speichern ───

    def save(self, config: BreakoutConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit Abschnitts-Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")

    def _build_commented_yaml(self, config: BreakoutConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )
        return cm

    # ─── Anzeige ───

    def show(self, config: BreakoutConfig) -> None:
        """Zeigt die wirksame Konfiguration als Tabelle."""
        table = Table(title="Breakout-IRC Konfiguration", box=box.ROUNDED)
        table.add_column("Parameter", style="bold")
        table.add_column("Wert")
        for section in ("project", "irc", "bots"):
            for k, v in getattr(config, section).model_dump().items():
                table.add_row(f"{section}.{k}", str(v))
        table.add_row("topic_prefix", config.topic_prefix)
        table.add_row("todo_strings", ", ".join(config.todo_strings))
        console.print(table)
