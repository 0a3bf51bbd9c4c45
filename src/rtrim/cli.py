"""rtrim CLI — Typer application that cleans staged trailing whitespace."""

from __future__ import annotations

from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from rtrim import __version__
from rtrim.errors import RTrimError

app = typer.Typer(
    name="rtrim",
    help="Strip trailing whitespace from staged lines and re-stage the files.",
    add_completion=False,
)

console = Console(stderr=True)


def _fail(exc: RTrimError) -> NoReturn:
    """Print the single-line diagnostic and exit 1."""
    console.print(f"error {exc}", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=1) from exc


def _version_callback(value: bool) -> None:
    if value:
        print(f"rtrim {__version__}")
        raise typer.Exit()


def _manage_hook(hooks_dir: Path, *, install: bool, force: bool) -> None:
    from rtrim.hooks.installer import install_hook, uninstall_hook

    msg = install_hook(hooks_dir, force=force) if install else uninstall_hook(hooks_dir)
    console.print(f"[green]✓[/green] {escape(msg)}", highlight=False)


@app.command()
def main(
    paths: Optional[List[str]] = typer.Argument(
        None, metavar="[PATHSPEC]...",
        help="Only clean staged paths matching these pathspecs, relative to the current directory (or --repo)",
    ),
    repo: Optional[Path] = typer.Option(
        None, "--repo", help="Directory to start repository discovery from (default: cwd)",
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rtrim.toml"),
    context: Optional[int] = typer.Option(
        None, "--context", "-U", min=0, help="Unchanged lines around each change to clean as well",
    ),
    no_restage: bool = typer.Option(False, "--no-restage", help="Do not add cleaned files to the index"),
    dry_run: bool = typer.Option(False, "--dry-run", help="List flagged lines without changing anything"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    install: bool = typer.Option(False, "--install-hook", help="Install rtrim as the pre-commit hook"),
    uninstall: bool = typer.Option(False, "--uninstall-hook", help="Remove the rtrim pre-commit hook"),
    force: bool = typer.Option(False, "--force", help="Replace an existing pre-commit hook (it is kept and run first)"),
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """Strip trailing whitespace from the lines staged for commit."""
    from rtrim.config.loader import load_config
    from rtrim.git.adapter import Repository
    from rtrim.output import terminal
    from rtrim.pipeline import run

    if install and uninstall:
        raise typer.BadParameter("--install-hook and --uninstall-hook cannot be combined")

    try:
        repository = Repository.discover(repo)

        if install or uninstall:
            _manage_hook(repository.hooks_dir(), install=install, force=force)
            return

        cfg = load_config(repository.workdir, config)
        if context is not None:
            cfg.scan.context_lines = context
        if no_restage:
            cfg.restage.enabled = False
        filters = repository.pathspecs_from_start(paths) if paths else list(cfg.scan.paths)

        if verbose:
            console.print(f"[dim]Repo root: {repository.workdir}[/dim]")
            console.print(f"[dim]Path filters: {', '.join(filters) or '(none)'}[/dim]")
            console.print(f"[dim]Context lines: {cfg.scan.context_lines}[/dim]")

        result = run(repository, filters, cfg, dry_run=dry_run)
    except RTrimError as exc:
        _fail(exc)

    if dry_run or verbose:
        terminal.render(result, console, show_summary=verbose)
