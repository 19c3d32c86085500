"""Tmux session management for sess.

Thin adapter over the tmux command line: list, create, switch/attach and
kill sessions, plus the server-global environment used to remember the
last session.
"""

import os
import re
import subprocess
from collections.abc import Iterator

from sess_core.paths import log_shell_command

# Server-global environment variable holding the previously active session
LAST_SESSION_VAR = "SESS_LAST_SESSION"


class TmuxError(Exception):
    """Raised when a tmux command that must succeed fails."""

    def __init__(self, message: str, session: str | None = None, stderr: str = ""):
        super().__init__(message)
        self.session = session
        self.stderr = stderr


def _tmux_cmd(*args: str, socket_path: str | None = None) -> list[str]:
    """Build a tmux command with optional custom socket.

    If socket_path is given, uses it.  Otherwise checks SESS_TMUX_SOCKET env var.
    """
    cmd = ["tmux"]
    sp = socket_path or os.environ.get("SESS_TMUX_SOCKET")
    if sp:
        cmd.extend(["-S", sp])
    cmd.extend(args)
    return cmd


def _run(*args: str, capture: bool = True) -> subprocess.CompletedProcess:
    """Run a tmux command, logging it and its outcome."""
    cmd = _tmux_cmd(*args)
    log_shell_command(cmd, prefix="tmux")
    if capture:
        result = subprocess.run(cmd, capture_output=True, text=True)
    else:
        result = subprocess.run(cmd)
    log_shell_command(cmd, prefix="tmux", returncode=result.returncode)
    return result


def _target(name: str) -> str:
    """Exact-match session target, so "foo" never resolves to "foobar"."""
    return f"={name}"


def has_tmux() -> bool:
    """Check if tmux is installed."""
    import shutil
    return shutil.which("tmux") is not None


def in_tmux() -> bool:
    """Check if we're currently inside a tmux client."""
    return bool(os.environ.get("TMUX"))


def session_name(text: str) -> str:
    """Normalize text into the name tmux will actually give a session.

    tmux replaces '.' and ':' in session names with '_'.
    """
    return re.sub(r"[.:]", "_", text)


def ensure_session(name: str, cwd: str) -> None:
    """Create a detached session rooted at cwd unless it already exists.

    A failed create (typically "duplicate session") is not an error: the
    existing session is left untouched, including its start directory.
    """
    _run("new-session", "-d", "-s", name, "-c", cwd)


def list_sessions() -> Iterator[str]:
    """Yield the names of all sessions on the server.

    Yields nothing when the server has no sessions or is not running.
    """
    result = _run("list-sessions", "-F", "#{session_name}")
    if result.returncode != 0:
        return
    for line in result.stdout.splitlines():
        if line:
            yield line


def get_session_name() -> str | None:
    """Get the currently active session name, or None.

    Uses $TMUX_PANE to target the caller's pane when inside tmux; outside
    tmux the server reports its most recently used session.
    """
    pane = os.environ.get("TMUX_PANE")
    if pane:
        result = _run("display-message", "-p", "-t", pane, "#{session_name}")
    else:
        result = _run("display-message", "-p", "#{session_name}")
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def attach(name: str) -> None:
    """Attach a new client on this terminal to a session."""
    result = _run("attach-session", "-t", _target(name), capture=False)
    if result.returncode != 0:
        raise TmuxError(f"Could not attach to session '{name}'", session=name)


def switch_client(name: str) -> None:
    """Switch the current client to a session."""
    result = _run("switch-client", "-t", _target(name))
    if result.returncode != 0:
        raise TmuxError(f"Could not switch to session '{name}'", session=name,
                        stderr=result.stderr.strip())


def switch_to(name: str, inside_client: bool) -> None:
    """Focus a session: switch-client from inside tmux, attach from outside."""
    if inside_client:
        switch_client(name)
    else:
        attach(name)


def kill_session(name: str) -> None:
    """Kill a tmux session."""
    result = _run("kill-session", "-t", _target(name))
    if result.returncode != 0:
        raise TmuxError(f"Could not kill session '{name}'", session=name,
                        stderr=result.stderr.strip())


def get_global_env(key: str) -> str | None:
    """Read a server-global environment variable. None if unset."""
    result = _run("show-environment", "-g", key)
    if result.returncode != 0:
        return None
    line = result.stdout.strip()
    # "-KEY" marks a variable removed from the environment
    if not line or line.startswith("-") or "=" not in line:
        return None
    return line.split("=", 1)[1] or None


def set_global_env(key: str, value: str) -> None:
    """Set a server-global environment variable."""
    result = _run("set-environment", "-g", key, value)
    if result.returncode != 0:
        raise TmuxError(f"Could not set {key}", stderr=result.stderr.strip())
