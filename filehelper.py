#!/usr/bin/env python3
"""
FileHelper - file-system convenience commands

Main entry point for the FileHelper CLI application.
"""

import sys

import click
from rich.console import Console
from rich.table import Table
from typing import List, Optional

from core import AuditLogger, FileHelperError, load_config, save_config
from core.config import DEFAULT_CONFIG_PATH
from modules.file_helper import FileHelper, FileInfo, MoveResult, retarget_path


console = Console(soft_wrap=True)


def get_file_helper(ctx: click.Context) -> FileHelper:
    """Get a FileHelper wired to the configured audit log."""
    config = ctx.obj["config"]
    return FileHelper(logger=config.make_logger())


def fail(error: Exception) -> None:
    console.print(f"[red]Error:[/red] {error}")
    sys.exit(1)


def print_files(files: List[FileInfo], title: str) -> None:
    if not files:
        console.print("[dim]No files found.[/dim]")
        return

    table = Table(title=title)
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="dim")

    for f in files:
        table.add_row(f.name, str(f.size), f.modified.strftime("%Y-%m-%d %H:%M:%S"))

    console.print(table)


def print_file(info: Optional[FileInfo]) -> None:
    if info is None:
        console.print("[dim]No files found.[/dim]")
        return
    console.print(f"{info.path}  [dim]{info.modified.isoformat(sep=' ', timespec='seconds')}[/dim]")


def print_move_results(results: List[MoveResult]) -> None:
    if not results:
        console.print("[dim]No files to move.[/dim]")
        return

    for r in results:
        if r.moved:
            console.print(f"  ✅ {r.source} → {r.destination}")
        elif r.error:
            console.print(f"  ❌ {r.source}: [red]{r.error}[/red]")
        else:
            console.print(f"  ⏭️  {r.source}: [yellow]destination exists[/yellow]")

    moved = sum(1 for r in results if r.moved)
    console.print(f"\nMoved {moved} of {len(results)} file(s).")


@click.group()
@click.version_option(version="0.1.0", prog_name="FileHelper")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Path to the YAML configuration file.")
@click.pass_context
def filehelper(ctx, config_path: str):
    """
    FileHelper - file-system convenience commands

    Query, move, copy and clean up the files of a single directory.
    """
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path)


@filehelper.command()
@click.argument("path")
@click.pass_context
def size(ctx, path: str):
    """Show the size of a file in bytes."""
    try:
        console.print(get_file_helper(ctx).get_file_size(path))
    except FileHelperError as e:
        fail(e)


@filehelper.command("ls")
@click.argument("directory")
@click.option("--pattern", "-p", default=None, help="Glob pattern for file names.")
@click.option("--ext", "-e", "extensions", multiple=True, help="Extension filter (repeatable).")
@click.pass_context
def list_command(ctx, directory: str, pattern: Optional[str], extensions):
    """List the files of a directory."""
    helper = get_file_helper(ctx)
    try:
        if extensions:
            files = helper.list_files_by_extensions(directory, extensions)
        else:
            files = helper.list_files(directory, pattern or ctx.obj["config"].default_pattern)
    except FileHelperError as e:
        fail(e)
    print_files(files, title=directory)


@filehelper.command()
@click.argument("directory")
@click.option("--pattern", "-p", default="", help="Glob pattern for file names.")
@click.option("--ext", "-e", "extensions", multiple=True, help="Extension filter (repeatable).")
@click.pass_context
def oldest(ctx, directory: str, pattern: str, extensions):
    """Show the least recently modified file."""
    helper = get_file_helper(ctx)
    try:
        if extensions:
            info = helper.oldest_file_by_extensions(directory, extensions)
        else:
            info = helper.oldest_file(directory, pattern)
    except FileHelperError as e:
        fail(e)
    print_file(info)


@filehelper.command()
@click.argument("directory")
@click.option("--pattern", "-p", default="", help="Glob pattern for file names.")
@click.option("--ext", "-e", "extensions", multiple=True, help="Extension filter (repeatable).")
@click.pass_context
def newest(ctx, directory: str, pattern: str, extensions):
    """Show the most recently modified file."""
    helper = get_file_helper(ctx)
    try:
        if extensions:
            info = helper.newest_file_by_extensions(directory, extensions)
        else:
            info = helper.newest_file(directory, pattern)
    except FileHelperError as e:
        fail(e)
    print_file(info)


@filehelper.command()
@click.argument("source")
@click.argument("dest_directory")
@click.pass_context
def move(ctx, source: str, dest_directory: str):
    """Move a file into another directory (never overwrites)."""
    try:
        moved = get_file_helper(ctx).move_file(source, dest_directory)
    except FileHelperError as e:
        fail(e)

    if moved:
        console.print(f"[green]Moved:[/green] {source} → {dest_directory}")
    else:
        console.print(f"[yellow]Skipped:[/yellow] a file named like {source} already exists in {dest_directory}")


@filehelper.command("move-all")
@click.argument("source_directory")
@click.argument("dest_directory")
@click.option("--pattern", "-p", default="", help="Glob pattern for file names.")
@click.option("--ext", "-e", "extensions", multiple=True, help="Extension filter (repeatable).")
@click.pass_context
def move_all(ctx, source_directory: str, dest_directory: str, pattern: str, extensions):
    """Move every matching file from one directory to another."""
    helper = get_file_helper(ctx)
    try:
        if extensions:
            results = helper.move_files_by_extensions(source_directory, dest_directory, extensions)
        else:
            results = helper.move_files_in_directory(source_directory, dest_directory, pattern)
    except FileHelperError as e:
        fail(e)
    print_move_results(results)


@filehelper.command()
@click.argument("source")
@click.argument("dest_path")
@click.pass_context
def rename(ctx, source: str, dest_path: str):
    """Move a file to a new path, creating missing directories."""
    try:
        moved = get_file_helper(ctx).move_and_rename_file(source, dest_path)
    except FileHelperError as e:
        fail(e)

    if moved:
        console.print(f"[green]Moved:[/green] {source} → {dest_path}")
    else:
        console.print(f"[yellow]Skipped:[/yellow] {dest_path} already exists")


@filehelper.command()
@click.argument("source")
@click.argument("dest_directory")
@click.pass_context
def copy(ctx, source: str, dest_directory: str):
    """Copy a file into another directory (overwrites)."""
    try:
        dst = get_file_helper(ctx).copy_file(source, dest_directory)
    except FileHelperError as e:
        fail(e)
    console.print(f"[green]Copied:[/green] {source} → {dst}")


@filehelper.command()
@click.argument("path")
@click.pass_context
def rm(ctx, path: str):
    """Delete a file if it exists."""
    try:
        deleted = get_file_helper(ctx).delete_file_safe(path)
    except FileHelperError as e:
        fail(e)

    if deleted:
        console.print(f"[green]Deleted:[/green] {path}")
    else:
        console.print(f"[dim]Nothing to delete at {path}[/dim]")


@filehelper.command()
@click.argument("directory")
@click.option("--safe/--strict", default=True, show_default=True,
              help="--safe keeps going past failures; --strict stops at the first.")
@click.pass_context
def clean(ctx, directory: str, safe: bool):
    """Delete every file in a directory (subdirectories are kept)."""
    helper = get_file_helper(ctx)
    try:
        if safe:
            deleted = helper.delete_all_files_in_directory_safe(directory)
        else:
            deleted = helper.delete_all_files_in_directory(directory)
    except FileHelperError as e:
        for path, message in getattr(e, "failures", []):
            console.print(f"  ❌ {path}: [red]{message}[/red]")
        fail(e)
    console.print(f"[green]Deleted {deleted} file(s).[/green]")


@filehelper.command()
@click.argument("path")
@click.pass_context
def touch(ctx, path: str):
    """Create an empty file, truncating it if it exists."""
    try:
        get_file_helper(ctx).create_empty_file(path)
    except FileHelperError as e:
        fail(e)
    console.print(f"[green]Created:[/green] {path}")


@filehelper.command()
@click.argument("path")
@click.pass_context
def exists(ctx, path: str):
    """Check whether a file exists under any extension. Exit status 1 if not."""
    try:
        found = get_file_helper(ctx).file_exists_ignoring_extension(path)
    except FileHelperError as e:
        fail(e)

    if found:
        console.print(f"✅ [green]Found[/green] {path}.*")
    else:
        console.print(f"❌ [red]Not found[/red] {path}.*")
        sys.exit(1)


@filehelper.command()
@click.argument("old_path")
@click.argument("new_directory")
def retarget(old_path: str, new_directory: str):
    """Print OLD_PATH's file name placed in NEW_DIRECTORY (no file access)."""
    click.echo(retarget_path(old_path, new_directory))


@filehelper.command()
@click.pass_context
def init(ctx):
    """Write the current settings to the configuration file."""
    config = ctx.obj["config"]
    save_config(config)
    console.print(f"[green]Saved configuration:[/green] {config.config_path}")


@filehelper.command()
@click.option("--limit", "-n", default=20, show_default=True, help="Number of entries to show.")
@click.option("--failed", is_flag=True, help="Only show failed actions.")
@click.option("--export", "export_format", type=click.Choice(["json", "csv"]),
              help="Print the whole log in this format instead of a table.")
@click.option("--clear", is_flag=True, help="Clear the log, keeping a backup.")
@click.pass_context
def audit(ctx, limit: int, failed: bool, export_format: Optional[str], clear: bool):
    """View the audit log."""
    logger = AuditLogger(log_path=ctx.obj["config"].audit_log_path)

    if clear:
        if not click.confirm("Clear the audit log?"):
            console.print("[dim]Audit log left unchanged.[/dim]")
            return
        logger.clear(confirm=True)
        console.print("[green]Audit log cleared.[/green] A backup was kept next to it.")
        return

    if export_format:
        click.echo(logger.export(format=export_format))
        return

    entries = logger.get_failed_actions(limit=limit) if failed else logger.get_recent(limit=limit)

    if not entries:
        console.print("[dim]No audit entries found.[/dim]")
        return

    table = Table(title="Recent Failed Actions" if failed else "Recent Audit Log")
    table.add_column("Time", style="dim")
    table.add_column("Action")
    table.add_column("Status")

    for entry in entries:
        # Format timestamp
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        # Status color
        status_str = entry.status
        if entry.status == "executed":
            status_str = f"[green]{entry.status}[/green]"
        elif entry.status == "failed":
            status_str = f"[red]{entry.status}[/red]"
        elif entry.status == "skipped":
            status_str = f"[yellow]{entry.status}[/yellow]"

        table.add_row(
            time_str,
            entry.action_description[:50] + "..." if len(entry.action_description) > 50 else entry.action_description,
            status_str
        )

    console.print(table)


if __name__ == "__main__":
    filehelper()
