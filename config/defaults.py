from config.schema import (
    BotConfig,
    BreakoutConfig,
    IrcConfig,
    ProjectConfig,
)


def default_irc_config() -> IrcConfig:
    """Standard-Verbindung zum W3C-IRC-Server.

    Server   irc.w3.org:6667 (Klartext)
    Nickname tpac-breakout-bot
    Kein Zeitlimit: der Lauf endet, sobald alle Channels fertig sind.
    """
    return IrcConfig(
        server="irc.w3.org",
        port=6667,
        nickname="tpac-breakout-bot",
        timeout_seconds=0,
        poll_interval=0.2,
    )


def default_bots() -> BotConfig:
    """RRSAgent protokolliert, Zakim verwaltet Agenda und Redeliste."""
    return BotConfig(logger_nick="RRSAgent", timer_nick="Zakim")


def default_breakout_config() -> BreakoutConfig:
    """Komplette Default-Konfiguration (Projekt kommt aus der Umgebung)."""
    return BreakoutConfig(
        project=ProjectConfig(),
        irc=default_irc_config(),
        bots=default_bots(),
        topic_prefix="TPAC breakout",
    )


# ─── UMGEBUNGSVARIABLEN ───
# Variable → (Abschnitt, Feld). Werte aus der Umgebung überschreiben die YAML-Datei.

ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "PROJECT_OWNER":  ("project", "owner"),
    "PROJECT_NUMBER": ("project", "number"),
    "CHAIR_W3CID":    ("project", "chairs_to_w3cid"),  # JSON-Objekt
    "IRC_SERVER":     ("irc", "server"),
    "IRC_PORT":       ("irc", "port"),
    "IRC_NICK":       ("irc", "nickname"),
}
