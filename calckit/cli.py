"""CLI interface for calckit.

Commands:
- calc: Evaluate key presses and buttons ("5 + 3 x 2 =", "16 sqrt")
- repl: Interactive calculator
- history: Show, clear or export calculation history
- theme / mode / sound: Preferences
- keypad: Show the keypad for the current mode
- config: Show or initialize configuration
"""

import sys
from pathlib import Path

import click
import questionary
from rich.console import Console

from . import __version__
from .config import config_paths, load_config, save_config
from .export import EXPORT_FORMATS, write_export
from .preferences import MODES, THEMES
from .session import CalculatorSession, get_session


console = Console()


def _open_session(ctx, echo: bool = False) -> CalculatorSession:
    """Build the session for the selected project path, or exit on bad config."""
    try:
        return get_session(ctx.obj["project_path"], echo=echo)
    except ValueError as e:
        console.print(f"[red]Error: invalid configuration: {e}[/red]")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="calckit")
@click.option(
    "--path",
    "-p",
    default=".",
    envvar="CALCKIT_PATH",
    help="Directory holding .calckit/ data (default: current directory)",
)
@click.pass_context
def main(ctx, path: str):
    """calckit - Terminal arithmetic calculator.

    Left-to-right evaluation with:
    - Basic and scientific keypads
    - Persistent calculation history
    - Theme, keypad mode and sound preferences
    """
    ctx.ensure_object(dict)
    ctx.obj["project_path"] = str(Path(path).resolve())


# --- Calc Command ---


@main.command()
@click.argument("tokens", nargs=-1, required=True)
@click.option("--plain", is_flag=True, help="Print only the raw result")
@click.pass_context
def calc(ctx, tokens: tuple, plain: bool):
    """Evaluate keys and buttons left to right.

    Tokens are keys ("5", "+", "=", "%"), runs of keys ("12.5*4="),
    or button names (sqrt, sin, pi, clear, delete...).

    Examples:
        calckit calc 5 + 3 x 2 =
        calckit calc "12.5*4="
        calckit calc 16 sqrt
    """
    session = _open_session(ctx)

    try:
        errors = session.feed(tokens)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if plain:
        if not errors:
            click.echo(session.engine.current_operand)
        return

    session.renderer.show()


# --- REPL Command ---


REPL_HELP = """[bold]Enter keys or buttons, e.g.[/bold] 5 + 3 x 2 =   16 sqrt   pi
[bold]Commands:[/bold]
  :history \\[text]   show recent calculations (matching text)
  :load \\[n]        recall history entry n (1 = most recent)
  :clear-history    clear all history
  :theme            toggle dark/light theme
  :mode             toggle basic/scientific keypad
  :sound            toggle key sounds
  :keypad           show the keypad
  :help             this help
  :quit             leave"""


def _repl_load(session: CalculatorSession, args: list):
    entries = session.recent_history(session.history.capacity)
    if not entries:
        console.print("[dim]No calculations yet[/dim]")
        return

    if args:
        try:
            index = int(args[0]) - 1
        except ValueError:
            console.print(f"[red]Error: not an entry number: {args[0]}[/red]")
            return
    else:
        choices = [
            questionary.Choice(title=str(entry), value=i)
            for i, entry in enumerate(entries)
        ]
        index = questionary.select("Recall which result?", choices=choices).ask()
        if index is None:
            return

    if session.load_from_history(index) is None:
        console.print(f"[red]Error: no history entry {index + 1}[/red]")
        return
    session.renderer.show()


def _repl_clear_history(session: CalculatorSession):
    if session.config.confirm_clear_history:
        confirmed = questionary.confirm("Clear all history?", default=False).ask()
        if not confirmed:
            console.print("[yellow]Aborted.[/yellow]")
            return
    session.clear_history()
    console.print("[green]History cleared.[/green]")


def _repl_command(session: CalculatorSession, line: str) -> bool:
    """Run a ':' command. Returns False when the REPL should stop."""
    name, *args = line[1:].split()

    if name in ("quit", "q", "exit"):
        return False
    if name == "help":
        console.print(REPL_HELP)
    elif name == "history":
        session.renderer.render_history(
            session.recent_history(term=" ".join(args) or None)
        )
    elif name == "load":
        _repl_load(session, args)
    elif name == "clear-history":
        _repl_clear_history(session)
    elif name == "theme":
        theme = session.toggle_theme()
        console.print(f"[green]Theme: {theme}[/green]")
        session.renderer.show()
    elif name == "mode":
        mode = session.toggle_mode()
        session.renderer.render_keypad(mode)
    elif name == "sound":
        enabled = session.toggle_sound()
        console.print(f"[green]Sound: {'on' if enabled else 'off'}[/green]")
    elif name == "keypad":
        session.renderer.render_keypad(session.preferences.mode)
    else:
        console.print(f"[red]Unknown command: :{name}[/red] (try :help)")
    return True


@main.command()
@click.pass_context
def repl(ctx):
    """Interactive calculator.

    Each line is fed as keys and buttons; lines starting with ':' are
    commands (:help lists them). End with :quit or Ctrl-D.
    """
    session = _open_session(ctx)

    console.print(REPL_HELP)
    session.renderer.render_keypad(session.preferences.mode)
    session.renderer.show()

    while True:
        try:
            line = click.prompt(
                "calckit", prompt_suffix="> ", default="", show_default=False
            )
        except (EOFError, click.Abort):
            console.print()
            break

        line = line.strip()
        if not line:
            continue

        if line.startswith(":"):
            if len(line) == 1:
                continue
            if not _repl_command(session, line):
                break
            continue

        try:
            session.feed(line.split())
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            continue
        session.renderer.show()


# --- History Commands ---


@main.group()
def history():
    """Show, clear or export calculation history."""
    pass


@history.command("show")
@click.option("--count", "-n", type=int, default=None, help="Number of entries to show")
@click.option(
    "--grep",
    "-g",
    "term",
    default=None,
    help="Only entries whose expression contains TEXT",
)
@click.pass_context
def history_show(ctx, count, term):
    """Show recent calculations, most recent first.

    Examples:
        calckit history show -n 5
        calckit history show --grep sqrt
    """
    session = _open_session(ctx)
    session.renderer.render_history(session.recent_history(count, term))


@history.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def history_clear(ctx, yes: bool):
    """Clear calculation history."""
    session = _open_session(ctx)

    if not yes and session.config.confirm_clear_history:
        if not click.confirm("Clear all history?", default=False):
            console.print("[yellow]Aborted.[/yellow]")
            return

    session.clear_history()
    console.print("[green]History cleared.[/green]")


@history.command("export")
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(EXPORT_FORMATS),
    default="json",
    help="Export format",
)
@click.option("--output", "-o", default=None, help="Write to file instead of stdout")
@click.pass_context
def history_export(ctx, fmt: str, output):
    """Export history as json, yaml, markdown or html.

    Examples:
        calckit history export
        calckit history export -f markdown -o history.md
    """
    session = _open_session(ctx)
    entries = session.history.load()
    content = write_export(entries, fmt, output, theme=session.preferences.theme)

    if output:
        console.print(f"[green]Exported {len(entries)} entries to {output}[/green]")
    else:
        click.echo(content)


# --- Preference Commands ---


@main.command()
@click.argument("name", required=False, type=click.Choice(THEMES))
@click.pass_context
def theme(ctx, name):
    """Set the theme, or toggle it when no name is given."""
    session = _open_session(ctx)
    current = session.toggle_theme(name)
    console.print(f"[green]Theme: {current}[/green]")


@main.command()
@click.argument("name", required=False, type=click.Choice(MODES))
@click.pass_context
def mode(ctx, name):
    """Set the keypad mode, or toggle it when no name is given."""
    session = _open_session(ctx)
    current = session.toggle_mode(name)
    console.print(f"[green]Mode: {current}[/green]")
    session.renderer.render_keypad(current)


@main.command()
@click.argument("state", required=False, type=click.Choice(["on", "off"]))
@click.pass_context
def sound(ctx, state):
    """Turn key sounds on or off, or toggle them."""
    session = _open_session(ctx)
    enabled = session.toggle_sound(None if state is None else state == "on")
    console.print(f"[green]Sound: {'on' if enabled else 'off'}[/green]")


@main.command()
@click.pass_context
def keypad(ctx):
    """Show the keypad for the current mode."""
    session = _open_session(ctx)
    session.renderer.render_keypad(session.preferences.mode)


# --- Config Command ---


@main.command()
@click.option("--init", "init_", is_flag=True, help="Write a default config.json")
@click.pass_context
def config(ctx, init_: bool):
    """Show the effective configuration."""
    project_path = ctx.obj["project_path"]

    try:
        cfg = load_config(project_path)
    except ValueError as e:
        console.print(f"[red]Error: invalid configuration: {e}[/red]")
        sys.exit(1)

    if init_:
        path = save_config(project_path, cfg)
        console.print(f"[green]Wrote {path}[/green]")

    toml_file, json_file = config_paths(project_path)
    source = toml_file if toml_file.exists() else json_file if json_file.exists() else None

    console.print(f"[bold]Source:[/bold] {source or '(defaults)'}")
    console.print(f"  History capacity: {cfg.history_capacity}")
    console.print(f"  History shown: {cfg.history_shown}")
    console.print(f"  Confirm clear: {cfg.confirm_clear_history}")
    console.print(f"  Thousands separator: '{cfg.thousands_separator}'")
    console.print(f"  Error policy: {cfg.error_policy.value}")


if __name__ == "__main__":
    main()
