"""Click CLI definitions for sess.

The ``cli`` group dispatches through the command table in
``cli.helpers`` (first-letter abbreviations, unknown words fall through
to ``switch``).  Every command is a short pipeline over ``projects``,
``candidates``, ``picker``, ``switcher`` and ``tmux``.
"""

import os
from pathlib import Path

import click

from sess_core import candidates, picker, projects, switcher
from sess_core import tmux as tmux_mod
from sess_core.cli.helpers import (
    CONTEXT_SETTINGS,
    GROUP_CONTEXT_SETTINGS,
    QUERY_CONTEXT_SETTINGS,
    Command,
    SessGroup,
    _log,
    inside_client,
    query_from,
    require_dependencies,
)

VERSION = "1.3.0"

# Commands that run without fzf/tmux on the path
_NO_DEPENDENCY_COMMANDS = {Command.HELP.value, Command.VERSION.value}


@click.group(invoke_without_command=True, cls=SessGroup,
             context_settings=GROUP_CONTEXT_SETTINGS)
@click.pass_context
def cli(ctx):
    """sess: create-or-switch tmux sessions for your projects."""
    if ctx.invoked_subcommand not in _NO_DEPENDENCY_COMMANDS:
        require_dependencies()
    if ctx.invoked_subcommand is None:
        ctx.invoke(switch_cmd)


def _switch_to_picked(selected: list[candidates.Candidate]) -> None:
    """Reconcile the single picked candidate; nothing picked is a no-op."""
    if not selected:
        _log.debug("Nothing selected")
        return
    try:
        switcher.reconcile(selected[0], inside_client())
    except tmux_mod.TmuxError as e:
        _fail_tmux(e)


def _fail_tmux(e: tmux_mod.TmuxError) -> None:
    _log.warning("%s: %s", e, e.stderr)
    click.echo(str(e), err=True)
    if e.stderr:
        click.echo(e.stderr, err=True)
    raise SystemExit(1)


def _pick(choices: list[candidates.Candidate], query: str, **kwargs) -> list[candidates.Candidate]:
    try:
        return picker.pick(choices, query, **kwargs)
    except picker.PickerError as e:
        click.echo(str(e), err=True)
        raise SystemExit(1)


@cli.command(Command.SWITCH.value, context_settings=QUERY_CONTEXT_SETTINGS)
@click.argument("query", nargs=-1, type=click.UNPROCESSED)
def switch_cmd(query: tuple[str, ...]):
    """Pick a project or session and switch to it, creating it if needed."""
    config = projects.project_root_config()
    if config is None:
        click.echo("The default 'sess' command uses the SESS_PROJECT_ROOT environment variable", err=True)
        click.echo("to discover your projects. Set this in your shell's rc file.", err=True)
        click.echo("E.g. 'export SESS_PROJECT_ROOT=~/projects'", err=True)
        click.echo(err=True)
        click.echo("Run 'sess help' for more information", err=True)
        raise SystemExit(1)

    dirs = projects.list_projects(projects.parse_roots(config))
    sessions = candidates.from_sessions(tmux_mod.list_sessions())
    choices = candidates.merge(dirs, sessions)
    _log.debug("switch: %d projects, %d sessions, %d candidates",
               len(dirs), len(sessions), len(choices))
    _switch_to_picked(_pick(choices, query_from(query), auto_select=True))


@cli.command(Command.NEW.value, context_settings=CONTEXT_SETTINGS)
@click.argument("name", required=False)
def new_cmd(name: str | None):
    """Create (or join) a session for the current directory."""
    cwd = os.getcwd()
    session = tmux_mod.session_name(name or Path(cwd).name)
    # Stashes the session being left, like any forward switch
    cand = candidates.Candidate(session, cwd, candidates.Origin.PROJECT_DIRECTORY)
    try:
        switcher.reconcile(cand, inside_client())
    except tmux_mod.TmuxError as e:
        _fail_tmux(e)


@cli.command(Command.LIST.value, context_settings=CONTEXT_SETTINGS)
def list_cmd():
    """List all active sessions."""
    for name in tmux_mod.list_sessions():
        click.echo(name)


@cli.command(Command.CHOOSE.value, context_settings=QUERY_CONTEXT_SETTINGS)
@click.argument("query", nargs=-1, type=click.UNPROCESSED)
def choose_cmd(query: tuple[str, ...]):
    """Pick one of the active sessions and switch to it."""
    choices = candidates.merge(candidates.from_sessions(tmux_mod.list_sessions()))
    _switch_to_picked(_pick(choices, query_from(query), auto_select=True))


@cli.command(Command.KILL.value, context_settings=QUERY_CONTEXT_SETTINGS)
@click.argument("query", nargs=-1, type=click.UNPROCESSED)
def kill_cmd(query: tuple[str, ...]):
    """Pick one or more active sessions (tab to mark) and kill them."""
    choices = candidates.merge(candidates.from_sessions(tmux_mod.list_sessions()))
    selected = _pick(choices, query_from(query), multi=True, auto_select=False)
    failed = False
    for cand in selected:
        try:
            tmux_mod.kill_session(cand.name)
        except tmux_mod.TmuxError as e:
            _log.warning("%s: %s", e, e.stderr)
            click.echo(f"{e}: {e.stderr}" if e.stderr else str(e), err=True)
            failed = True
            continue
        _log.info("Killed session %s", cand.name)
        click.echo(f"Successfully killed {cand.name}")
    if failed:
        raise SystemExit(1)


@cli.command(Command.BACK.value, context_settings=CONTEXT_SETTINGS)
def back_cmd():
    """Switch back to the previously active session."""
    try:
        switcher.switch_back(inside_client())
    except switcher.NoStashedSession as e:
        click.echo(str(e), err=True)
        raise SystemExit(1)
    except tmux_mod.TmuxError as e:
        _fail_tmux(e)


@cli.command(Command.VERSION.value)
def version_cmd():
    """Print the installed version of sess."""
    click.echo(VERSION)


HELP_TEXT = """\
Consult the README for the most comprehensive info:
https://github.com/ChrisPenner/session-sauce

'sess' is a layer on top of tmux and fzf which provides quick switching and
creation of tmux sessions.

It allows you as the user to not care about which sessions currently exist
by simply asserting that you wish to switch to a given project, if a session
exists you'll be switched there. If it doesn't, it will be created, then you'll
be switched there.

'sess' also handles your tmux context for you, opening a tmux client if you're
outside of one, and switching sessions of the current client if you're already
inside tmux.

Note: All subcommand names can optionally be shortened to their first letter.
E.g. 'sess s' is equivalent to 'sess switch'

DEPENDENCIES
  fzf    https://github.com/junegunn/fzf  (or 'brew install fzf' on a Mac)
  tmux   https://github.com/tmux/tmux     (or 'brew install tmux' on a Mac)

CONFIGURATION
  SESS_PROJECT_ROOT   ':'-separated absolute paths to directories where you
                      keep your projects. Each subdirectory is offered by
                      'sess switch'. Export it from your shell's rc file.
  SESS_TMUX_SOCKET    Talk to the tmux server on this socket instead of the default.
  SESS_DEBUG          Set to 1 for debug logging in ~/.sess/debug/sess.log.

USAGE
  sess switch [query]   Pick from your projects and all existing sessions, then
                        switch there (creating the session if needed). This is
                        the default: 'sess' alone means 'sess switch', and
                        'sess <word>' means 'sess switch <word>'. If only one
                        entry matches the query it is selected automatically.
  sess -                Switch back to your previously accessed session.
                        Requires a running tmux server.
  sess new [name]       Create or join a session in the current directory,
                        named after the directory unless a name is given.
  sess list             List all active sessions.
  sess choose [query]   Like 'switch', but only offers existing sessions.
  sess kill [query]     Pick active sessions to kill (tab selects several).
  sess version          Display the installed version of sess.
  sess help             Display this usage info.\
"""


@cli.command(Command.HELP.value)
def help_cmd():
    """Show usage info."""
    click.echo(HELP_TEXT, err=True)


def main():
    cli()
