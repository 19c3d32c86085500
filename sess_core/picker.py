"""Interactive candidate selection through fzf."""

import shutil
import subprocess

from sess_core.candidates import Candidate
from sess_core.paths import log_shell_command

# fzf exit statuses that mean "nothing selected" rather than failure
_NO_MATCH = 1
_INTERRUPTED = 130


class PickerError(Exception):
    """Raised when fzf cannot be run or exits with an error."""


def has_fzf() -> bool:
    """Check if fzf is installed."""
    return shutil.which("fzf") is not None


def _is_plain_term(query: str) -> bool:
    """True if query is a single fuzzy term with no extended-search operators."""
    if not query or any(ch.isspace() for ch in query):
        return False
    if query[0] in "'^!" or query.endswith("$") or "|" in query:
        return False
    return True


def fuzzy_match(query: str, text: str) -> bool:
    """fzf-style fuzzy match: query chars appear in order, smart-case."""
    if query == query.lower():
        text = text.lower()
    pos = 0
    for ch in query:
        pos = text.find(ch, pos)
        if pos < 0:
            return False
        pos += 1
    return True


def _line(cand: Candidate) -> str:
    return f"{cand.directory}\t{cand.name}"


def build_fzf_cmd(query: str = "", multi: bool = False, auto_select: bool = True) -> list[str]:
    """Build the fzf argv; only the name column is displayed and searched."""
    cmd = ["fzf", "--delimiter=\t", "--with-nth=2"]
    if multi:
        cmd.append("--multi")
    elif auto_select:
        cmd.append("--select-1")
    if query:
        cmd.extend(["-q", query])
    return cmd


def pick(candidates: list[Candidate], query: str = "", multi: bool = False,
         auto_select: bool = True) -> list[Candidate]:
    """Let the user choose among candidates.

    With auto_select, a query matching exactly one candidate selects it
    without interaction.  Returns an empty list when there is nothing to
    choose from, nothing matches, or the user cancels.
    """
    if not candidates:
        return []

    if auto_select and not multi and _is_plain_term(query):
        matches = [c for c in candidates if fuzzy_match(query, c.name)]
        if len(matches) == 1:
            return matches

    by_line = {_line(c): c for c in candidates}
    cmd = build_fzf_cmd(query, multi=multi, auto_select=auto_select)
    log_shell_command(cmd, prefix="fzf")
    try:
        # Only stdout is captured; fzf draws its UI on the terminal
        result = subprocess.run(
            cmd,
            input="\n".join(by_line) + "\n",
            stdout=subprocess.PIPE,
            text=True,
        )
    except OSError as e:
        raise PickerError(f"Could not run fzf: {e}") from e
    log_shell_command(cmd, prefix="fzf", returncode=result.returncode)

    if result.returncode in (_NO_MATCH, _INTERRUPTED):
        return []
    if result.returncode != 0:
        raise PickerError(f"fzf exited with status {result.returncode}")

    selected = []
    for line in result.stdout.splitlines():
        cand = by_line.get(line)
        if cand is not None:
            selected.append(cand)
    return selected
