"""Create-or-switch logic and the one-slot last-session stack."""

from sess_core import tmux as tmux_mod
from sess_core.candidates import Candidate
from sess_core.paths import configure_logger

_log = configure_logger("sess.switcher")


class NoStashedSession(Exception):
    """Raised by switch_back when no previous session has been recorded."""


def _current_session() -> str | None:
    """Best-effort lookup of the active session."""
    try:
        return tmux_mod.get_session_name()
    except OSError as e:
        _log.debug("Could not read current session: %s", e)
        return None


def reconcile(candidate: Candidate, inside_client: bool) -> None:
    """Make sure a session exists for candidate, then focus it.

    The session being left is stashed in the server's last-session slot
    so ``sess -`` can return to it.  Failing to read or stash it only
    disables that; failing to switch raises TmuxError.
    """
    previous = _current_session()
    tmux_mod.ensure_session(candidate.name, candidate.directory)
    if previous and previous != candidate.name:
        try:
            tmux_mod.set_global_env(tmux_mod.LAST_SESSION_VAR, previous)
        except tmux_mod.TmuxError as e:
            _log.warning("Could not stash last session %s: %s", previous, e)
        else:
            _log.debug("Stashed last session %s", previous)
    _log.info("Switching to %s (%s)", candidate.name,
              "switch-client" if inside_client else "attach")
    tmux_mod.switch_to(candidate.name, inside_client)


def last_session() -> str | None:
    return tmux_mod.get_global_env(tmux_mod.LAST_SESSION_VAR)


def switch_back(inside_client: bool) -> str:
    """Switch to the stashed session and return its name.

    Does not create the session and does not update the slot.
    """
    name = last_session()
    if not name:
        raise NoStashedSession("No session stashed. Try switching sessions first.")
    _log.info("Switching back to %s", name)
    tmux_mod.switch_to(name, inside_client)
    return name
