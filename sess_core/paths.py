"""Centralized path management for sess.

Everything sess writes lives under ~/.sess/ (or $SESS_HOME):
- ~/.sess/debug/sess.log      - Command log (tmux/fzf invocations)
- ~/.sess/debug-enabled       - If present, log at DEBUG level
"""

import logging
import os
import shlex
from pathlib import Path


def sess_home() -> Path:
    """Return the sess home directory (~/.sess/ unless $SESS_HOME is set)."""
    override = os.environ.get("SESS_HOME")
    d = Path(override).expanduser() if override else Path.home() / ".sess"
    d.mkdir(parents=True, exist_ok=True)
    return d


def debug_dir() -> Path:
    """Return the debug/logs directory (~/.sess/debug/)."""
    d = sess_home() / "debug"
    d.mkdir(parents=True, exist_ok=True)
    return d


def command_log_file() -> Path:
    """Get the path to the command log file."""
    return debug_dir() / "sess.log"


def debug_enabled() -> bool:
    """Check if debug mode is enabled.

    Either $SESS_DEBUG is set to something other than "0", or the
    ~/.sess/debug-enabled marker file exists.
    """
    env = os.environ.get("SESS_DEBUG", "")
    if env and env != "0":
        return True
    return (sess_home() / "debug-enabled").exists()


def configure_logger(name: str, max_bytes: int = 10_000_000) -> logging.Logger:
    """Configure a logger that always writes to file with rotation.

    Args:
        name: Logger name (e.g., "sess.cli")
        max_bytes: Maximum log file size before rotation (default 10MB)

    Returns:
        Configured logger instance
    """
    from logging.handlers import RotatingFileHandler

    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    handler = RotatingFileHandler(
        command_log_file(),
        maxBytes=max_bytes,
        backupCount=1,
    )
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(message)s", datefmt="%H:%M:%S"
    ))
    logger.addHandler(handler)
    logger.propagate = False

    if debug_enabled():
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    return logger


def log_shell_command(cmd: list[str], prefix: str = "shell", returncode: int | None = None) -> None:
    """Log an external command to the command log.

    Args:
        cmd: Command argv
        prefix: Prefix for the log entry (e.g., "tmux", "fzf")
        returncode: If provided, logs as completion with return code
    """
    log = configure_logger("sess.shell")
    cmd_str = shlex.join(cmd)
    if returncode is None:
        log.info("%s: %s", prefix, cmd_str)
    elif returncode == 0:
        log.debug("%s done: %s", prefix, cmd_str)
    else:
        log.warning("%s failed (rc=%d): %s", prefix, returncode, cmd_str)
