"""Link Casing CLI commands."""

import json
import logging
import sys
from pathlib import Path

import typer
from linkcase_core import JsonSettingsStore, load_settings, settings_path
from linkcase_rewrite import plan_rewrite, rewrite_text_counted, rewrite_vault
from rich.console import Console
from rich.markup import escape
from rich.table import Table

# Initialize
app = typer.Typer(help="Link Casing - apply \\l \\u \\t \\c casing commands to wiki links")
settings_app = typer.Typer(help="Show or change persisted settings")
app.add_typer(settings_app, name="settings")
# Subcommands (e.g., tui) get added at bottom to avoid circular imports.
console = Console()
err_console = Console(stderr=True)

# Configure logging (default to WARNING, can be lowered to INFO in debug mode)
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M",
)
logger = logging.getLogger(__name__)


def _set_debug(debug: bool) -> None:
    level = logging.INFO if debug else logging.WARNING
    logging.getLogger().setLevel(level)
    logging.getLogger("linkcase_rewrite").setLevel(level)


def _read_source(file: str) -> str:
    if file == "-":
        return sys.stdin.read()
    path = Path(file).expanduser()
    if not path.exists():
        err_console.print(f"[red]Error: File not found: {escape(str(path))}[/red]")
        raise typer.Exit(2)
    # newline="" keeps CRLF so --caret offsets match the editor's
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error: Could not read {escape(str(path))}: {escape(str(e))}[/red]")
        raise typer.Exit(2) from e


@app.command()
def rewrite(
    file: str = typer.Argument("-", help="Markdown file to rewrite ('-' reads stdin)"),
    caret: int | None = typer.Option(
        None, "--caret", help="Caret offset in the input; reports where it lands afterwards"
    ),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Write the result back to FILE"),
    json_out: bool = typer.Option(False, "--json", help="Output text, caret and change flag as JSON"),
    check: bool = typer.Option(
        False, "--check", help="Write nothing; exit 1 if the text contains casing commands"
    ),
):
    """
    Rewrite casing commands in one document.

    Examples:
      echo '[[Link Name\\l]]' | linkcase rewrite
      linkcase rewrite note.md --in-place
    """
    if in_place and file == "-":
        err_console.print("[red]Error: --in-place needs a FILE, not stdin[/red]")
        raise typer.Exit(2)

    text = _read_source(file)
    if caret is not None and not 0 <= caret <= len(text):
        err_console.print(f"[red]Error: caret {caret} outside 0..{len(text)}[/red]")
        raise typer.Exit(2)

    try:
        settings = load_settings()
        if caret is not None:
            plan = plan_rewrite(text, caret, settings)
            output, changed, new_caret = plan.text, plan.changed, plan.caret
        else:
            output, _n = rewrite_text_counted(text, settings)
            changed, new_caret = output != text, None
    except Exception as e:
        err_console.print(f"[red]Error: {e}[/red]")
        logger.exception("Rewrite failed")
        raise typer.Exit(2) from e

    if check:
        if changed:
            err_console.print(f"[yellow]Would rewrite:[/yellow] {escape(file)}")
            raise typer.Exit(1)
        return

    if in_place:
        if changed:
            path = Path(file).expanduser()
            tmp = path.parent / f".{path.name}.lctmp"
            try:
                with open(tmp, "w", encoding="utf-8", newline="") as f:
                    f.write(output)
                tmp.replace(path)
            except OSError as e:
                err_console.print(f"[red]Error: Could not write {escape(str(path))}: {escape(str(e))}[/red]")
                raise typer.Exit(2) from e
        if not json_out:
            status = "[green][OK] Rewrote[/green]" if changed else "[dim]Unchanged:[/dim]"
            console.print(f"{status} {escape(file)}")
            return

    if json_out:
        print(json.dumps({"text": output, "caret": new_caret, "changed": changed}))
    else:
        typer.echo(output, nl=False)


@app.command()
def vault(
    path: str = typer.Argument(".", help="Vault folder to scan for *.md files"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be rewritten without writing"
    ),
    debug: bool = typer.Option(False, "--debug", help="Log every file that changes"),
):
    """Rewrite casing commands in every Markdown file of a vault."""
    _set_debug(debug)

    vault_path = Path(path).expanduser()
    if not vault_path.is_dir():
        console.print(f"[red]Error: Vault not found at {escape(str(vault_path))}[/red]")
        raise typer.Exit(2)

    try:
        report = rewrite_vault(vault_path, load_settings(), dry_run=dry_run)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        logger.exception("Vault rewrite failed")
        raise typer.Exit(2) from e

    title = "Vault Rewrite (dry run)" if dry_run else "Vault Rewrite"
    console.rule(f"[bold]{title}[/bold]")
    console.print(
        f"Files changed: [bold]{report.files_changed}[/bold]   "
        f"Links rewritten: [bold]{report.total_replacements}[/bold]"
    )
    if report.changes:
        table = Table(show_header=True, header_style="bold")
        table.add_column("File")
        table.add_column("Links", justify="right")
        for change in report.changes:
            table.add_row(escape(change.relpath), str(change.replacements))
        console.print(table)
    else:
        console.print("[dim]No changes.[/dim]")


@settings_app.command("show")
def settings_show(
    json_out: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show the persisted settings."""
    settings = load_settings()
    if json_out:
        print(json.dumps(settings.model_dump(by_alias=True), indent=2))
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("lowercaseFirstWordOnly", str(settings.lowercase_first_word_only).lower())
    console.print(table)
    console.print(f"[dim]{escape(str(settings_path()))}[/dim]")


@settings_app.command("set")
def settings_set(
    lowercase_first_word_only: bool | None = typer.Option(
        None,
        "--lowercase-first-word-only/--no-lowercase-first-word-only",
        help="\\l lowercases only the first word (keeps proper names in sentence-cased titles)",
    ),
):
    """Change and persist settings."""
    if lowercase_first_word_only is None:
        console.print("[yellow]Nothing to change.[/yellow] Pass --lowercase-first-word-only or --no-lowercase-first-word-only")
        raise typer.Exit(2)
    store = JsonSettingsStore()
    try:
        current = store.load()
        store.save(current.model_copy(update={"lowercase_first_word_only": lowercase_first_word_only}))
    except OSError as e:
        console.print(f"[red]Could not save settings:[/red] {e}")
        raise typer.Exit(2) from e
    state = "on" if lowercase_first_word_only else "off"
    console.print(f"[green][OK][/green] lowercaseFirstWordOnly: [bold]{state}[/bold]")


# Register the interactive editor last to avoid import cycles.
from linkcase_cli.tui import tui_app  # noqa: E402

app.add_typer(tui_app, name="tui")

if __name__ == "__main__":
    app()
