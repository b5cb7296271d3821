from __future__ import annotations

import logging
from pathlib import Path

DEFAULT_LOG_PATH = "omega-installer.log"
FALLBACK_LOG_NAME = "omega-installer.log"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure root logging for an OMEGA install run.

    The log file is the install transcript: the selected build strategy,
    every cargo/make and omega invocation (CMD lines, output at DEBUG),
    each installed or skipped source, and whether omega.toml was written or
    kept. An unwritable --log path falls back to ./omega-installer.log.

    Returns the actual file path being used.
    """

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(root, "_omega_configured", False):
        return getattr(root, "_omega_log_path", log_path)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)
    handlers: list[logging.Handler] = []

    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        chosen_path = log_path
    except OSError:
        chosen_path = str(Path.cwd() / FALLBACK_LOG_NAME)
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        root.addHandler(h)

    setattr(root, "_omega_configured", True)
    setattr(root, "_omega_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
