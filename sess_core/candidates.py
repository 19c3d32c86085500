"""Selection candidates: project directories and live sessions merged into one list."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass


class Origin(enum.Enum):
    PROJECT_DIRECTORY = "project"
    LIVE_SESSION = "session"


@dataclass(frozen=True)
class Candidate:
    """One selectable entry in the picker.

    ``name`` is both the label shown to the user and the session name the
    entry maps to.  ``directory`` is where the session is created if it
    does not exist yet.
    """
    name: str
    directory: str
    origin: Origin

    @property
    def key(self) -> str:
        return self.name.casefold()


def from_sessions(names: Iterable[str], directory: str = "") -> list[Candidate]:
    """Wrap live session names as candidates.

    The directory only matters when a session has to be created, which
    never happens for a session that is already live.
    """
    return [Candidate(name, directory, Origin.LIVE_SESSION) for name in names]


def merge(*sources: Iterable[Candidate]) -> list[Candidate]:
    """Merge candidate sources into a sorted list unique by name.

    Sources are concatenated in the order given, stable-sorted by name
    (case-insensitive), and duplicates collapsed keeping the first seen.
    Passing project directories before sessions makes a project's own
    directory win over a live session of the same name.
    """
    combined: list[Candidate] = []
    for source in sources:
        combined.extend(source)
    combined.sort(key=lambda c: c.key)

    merged: list[Candidate] = []
    seen: set[str] = set()
    for cand in combined:
        if cand.key in seen:
            continue
        seen.add(cand.key)
        merged.append(cand)
    return merged
