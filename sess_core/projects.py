"""Project directory discovery from SESS_PROJECT_ROOT."""

import os
from pathlib import Path

from sess_core import tmux as tmux_mod
from sess_core.candidates import Candidate, Origin

ROOT_ENV_VAR = "SESS_PROJECT_ROOT"
LEGACY_ROOT_ENV_VAR = "SESS_PROJECT_DIR"


def project_root_config() -> str | None:
    """Return the configured root list, or None if unset.

    Falls back to the legacy SESS_PROJECT_DIR variable.
    """
    for var in (ROOT_ENV_VAR, LEGACY_ROOT_ENV_VAR):
        value = os.environ.get(var, "").strip()
        if value:
            return value
    return None


def parse_roots(config: str) -> list[Path]:
    """Split a ':'-separated root list into paths, skipping empty entries."""
    return [Path(part).expanduser() for part in config.split(":") if part.strip()]


def list_projects(roots: list[Path]) -> list[Candidate]:
    """One candidate per immediate subdirectory of each root.

    Roots are visited in the order given and entries in directory listing
    order.  Missing roots, plain files and hidden entries contribute nothing.
    """
    projects = []
    for root in roots:
        try:
            entries = list(os.scandir(root))
        except (FileNotFoundError, NotADirectoryError, PermissionError):
            continue
        for entry in entries:
            if entry.name.startswith("."):
                continue
            try:
                if not entry.is_dir():
                    continue
            except OSError:
                continue
            projects.append(Candidate(
                name=tmux_mod.session_name(entry.name),
                directory=os.path.join(str(root), entry.name),
                origin=Origin.PROJECT_DIRECTORY,
            ))
    return projects
