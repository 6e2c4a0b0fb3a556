"""Breakout-IRC — Channels für Breakout-Sessions einrichten.

Verwendung:
  python main.py <slot|all> <nummer|all> [commands] [dismiss]

  <slot|all>     Beginn des Slots (z.B. 9:30) oder "all" für alle Slots.
                 Kurz vor jedem Slot ausführen: IRC-Bots verlassen Channels
                 nach 2 Stunden Inaktivität!
  <nummer|all>   Issue-Nummer der Session oder "all" für alle gültigen Sessions.
  commands       Nur die IRC-Befehle ausgeben, nichts ausführen.
  dismiss        Bots Protokoll erstellen und Channel verlassen lassen.

Beispiele:
  python main.py 9:30 all                 Alle Sessions des 9:30-Slots einrichten
  python main.py all 15 commands          Befehle für Session 15 anzeigen
  python main.py 9:30 all x dismiss       Bots im 9:30-Slot verabschieden
"""

import logging
import re
import sys
from functools import partial
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

console = Console()
logger = logging.getLogger("breakout_irc")

SLOT_ARG_RE = re.compile(r"^(\d{1,2}:\d{2}|all)$")
NUMBER_ARG_RE = re.compile(r"^(\d+|all)$")


def run_setup(config, slot: Optional[str], number: Optional[int], options,
              manager=None, out: Optional[Console] = None):
    """Projekt laden, Sessions auswählen, Channels berechnen und den Lauf starten."""
    from analysis.session_validator import validate_session
    from channels.controller import RunController
    from channels.errors import ConfigurationError
    from channels.grouper import group_sessions_by_channel, representative_sessions
    from channels.selection import select_sessions
    from config.manager import ConfigManager
    from data.project_source import fetch_project

    out = out or console
    manager = manager or ConfigManager()
    manager.require_project(config)
    owner, project_number = config.project.owner, config.project.number

    out.print()
    out.print(f"Lade Projekt {owner}/{project_number}...")
    project = fetch_project(
        owner, project_number,
        data_dir=config.project.data_dir,
        chairs_to_w3cid=config.project.chairs_to_w3cid,
    )
    if project is None:
        raise ConfigurationError(
            f"Projekt {owner}/{project_number} konnte nicht geladen werden"
        )
    logger.info(f"Projekt geladen:\n{project.summary()}")

    report = select_sessions(
        project, number=number, slot=slot,
        validator=partial(validate_session, todo_strings=config.todo_strings),
    )
    report.print_rich(out)
    out.print(f"Lade Projekt {owner}/{project_number}... fertig")

    out.print("Berechne IRC-Channels...")
    channels = group_sessions_by_channel(report.sessions, project)
    sessions = representative_sessions(channels)
    out.print(f"- {len(channels)} verschiedene IRC-Channels")
    out.print("Berechne IRC-Channels... fertig")

    controller = RunController(config, project, sessions, options, console=out)
    return controller.run()


@click.command()
@click.argument("slot", required=False)
@click.argument("number", required=False)
@click.argument("mode", required=False)
@click.argument("dismiss", required=False)
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur YAML-Konfiguration (Default: config/breakout.yaml).")
@click.option("--show-config", is_flag=True, default=False,
              help="Wirksame Konfiguration anzeigen und beenden.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliche Log-Ausgabe.")
def cli(slot, number, mode, dismiss, config_path, show_config, verbose):
    """Richtet IRC-Channels für Breakout-Sessions ein (RRSAgent, Zakim, Topic, Agenda)."""
    from channels.controller import RunOptions
    from config.manager import ConfigManager

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    mgr = ConfigManager()
    if show_config:
        mgr.show(mgr.load(config_path))
        return

    if not slot or not SLOT_ARG_RE.match(slot):
        console.print(
            'Als ersten Parameter einen gültigen Slot-Beginn (z.B. 9:30) oder "all" angeben.'
        )
        sys.exit(1)
    if not number or not NUMBER_ARG_RE.match(number):
        console.print(
            'Als zweiten Parameter eine Session-Nummer (z.B. 15) oder "all" angeben.'
        )
        sys.exit(1)

    options = RunOptions(
        only_commands=mode == "commands",
        dismiss_bots=dismiss == "dismiss",
    )
    slot_filter = None if slot == "all" else slot
    number_filter = None if number == "all" else int(number)

    try:
        config = mgr.load(config_path)
        run_setup(config, slot_filter, number_filter, options, manager=mgr)
    except Exception as e:
        console.print(f"[red]Etwas ist schiefgelaufen:[/red] {escape(str(e))}")
        logger.error(f"Lauf abgebrochen: {e}")
        raise


def main():
    """Einstiegspunkt."""
    cli()


if __name__ == "__main__":
    main()
