"""Shared helpers for the sess CLI package.

Contains the command table and its abbreviation rules, the Click group
that dispatches through it, and the startup dependency check.
"""

import enum

import click

from sess_core import picker
from sess_core import tmux as tmux_mod
from sess_core.paths import configure_logger

_log = configure_logger("sess.cli")

# Subcommands accept -h/--help; the group itself routes those to 'help'
CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])
GROUP_CONTEXT_SETTINGS = dict(help_option_names=[], ignore_unknown_options=True)
# Query words may look like options (e.g. "-x"); pass them through to fzf
QUERY_CONTEXT_SETTINGS = dict(CONTEXT_SETTINGS, ignore_unknown_options=True)


class Command(enum.Enum):
    SWITCH = "switch"
    NEW = "new"
    LIST = "list"
    CHOOSE = "choose"
    KILL = "kill"
    BACK = "-"
    VERSION = "version"
    HELP = "help"


def resolve_token(token: str) -> Command | None:
    """Map the first CLI argument to a command.

    Any non-empty prefix of a command name selects it ('k', 'ki', 'kill').
    Returns None for tokens that name no command; the caller treats
    those as a switch query.
    """
    if token == "-":
        return Command.BACK
    if token.startswith("-h") or token.startswith("--h"):
        return Command.HELP
    if not token or token.startswith("-"):
        return None
    for cmd in Command:
        if cmd.value.startswith(token):
            return cmd
    return None


class SessGroup(click.Group):
    """Click Group that resolves commands through the Command table.

    Unrecognized first arguments are not an error: they are handed to
    'switch' as its query, so ``sess myproj`` behaves like
    ``sess switch myproj``.
    """

    def resolve_command(self, ctx, args):
        cmd = resolve_token(args[0])
        if cmd is None:
            return Command.SWITCH.value, self.get_command(ctx, Command.SWITCH.value), args
        return cmd.value, self.get_command(ctx, cmd.value), args[1:]


def inside_client() -> bool:
    """Whether this invocation runs inside a tmux client (switch vs attach)."""
    return tmux_mod.in_tmux()


def require_dependencies() -> None:
    """Exit with install guidance if fzf or tmux is missing."""
    dependencies = [
        ("fzf", picker.has_fzf, "https://github.com/junegunn/fzf"),
        ("tmux", tmux_mod.has_tmux, "https://github.com/tmux/tmux"),
    ]
    for name, check, url in dependencies:
        if check():
            continue
        _log.warning("Missing dependency: %s", name)
        click.echo(f"sess requires {name}, but couldn't find it on your path", err=True)
        click.echo(f"Find installation instructions here: {url}", err=True)
        click.echo(f"Or 'brew install {name}' on a Mac", err=True)
        raise SystemExit(1)


def query_from(words: tuple[str, ...]) -> str:
    return " ".join(words)
