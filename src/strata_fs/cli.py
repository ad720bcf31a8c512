"""
Command-line interface for listing and watching managed documents.

Usage:
    strata-fs list WORKSPACE [--json]
    strata-fs watch WORKSPACE [--duration SECONDS] [--json]
"""

import json
import logging
import logging.config
import sys
import time
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from strata_fs.config import WatchConfig, get_config
from strata_fs.core import WorkspaceService
from strata_fs.models import BaseError, FsChangeEvent, FsEventKind

logger = logging.getLogger(__name__)

console = Console()

EVENT_STYLES = {
    FsEventKind.CREATED: "green",
    FsEventKind.MODIFIED: "yellow",
    FsEventKind.DELETED: "red",
}


def _configure(verbose: bool) -> WatchConfig:
    config = WatchConfig(debug_mode=True) if verbose else get_config()
    logging.config.dictConfig(config.get_log_config())
    return config


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """Discover and watch Strata documents in a workspace."""
    ctx.obj = _configure(verbose)


@main.command(name="list")
@click.argument('workspace', type=click.Path(path_type=Path))
@click.option('--json', 'as_json', is_flag=True, help='Print the paths as a JSON array')
@click.pass_obj
def list_command(config: WatchConfig, workspace: Path, as_json: bool):
    """List managed documents under WORKSPACE, sorted."""
    service = WorkspaceService(config=config)
    try:
        files = service.list_workspace_files(workspace)
    except BaseError as e:
        console.print(f"[red]Scan failed:[/red] {escape(str(e))}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(files))
        return

    for rel_path in files:
        click.echo(rel_path)
    console.print(f"[dim]{len(files)} managed documents[/dim]")


@main.command()
@click.argument('workspace', type=click.Path(path_type=Path))
@click.option('--duration', '-t', type=float, default=None, help='Stop after this many seconds')
@click.option('--json', 'as_json', is_flag=True, help='Print one JSON object per event')
@click.pass_obj
def watch(config: WatchConfig, workspace: Path, duration: float | None, as_json: bool):
    """Print change events for WORKSPACE until interrupted."""
    service = WorkspaceService(config=config)

    def print_event(event: FsChangeEvent) -> None:
        if as_json:
            click.echo(event.model_dump_json())
        else:
            style = EVENT_STYLES[event.kind]
            console.print(f"[{style}]{event.kind.value:<8}[/{style}] {escape(event.rel_path)}")

    service.subscribe(print_event)
    try:
        service.start_watching(workspace)
    except BaseError as e:
        console.print(f"[red]Cannot watch {escape(str(workspace))}:[/red] {escape(str(e))}")
        sys.exit(1)

    if not as_json:
        console.print(Panel.fit(f"Watching [bold]{escape(str(service.file_watcher.watched_root))}[/bold]", border_style="blue"))

    deadline = time.monotonic() + duration if duration is not None else None
    try:
        while deadline is None or time.monotonic() < deadline:
            time.sleep(0.1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
    finally:
        service.stop_watching()
        logger.debug("Watch status at exit: %s", service.get_status())


if __name__ == '__main__':
    main()
