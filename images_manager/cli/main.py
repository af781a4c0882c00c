"""Command line interface for Images Manager."""

import click
import csv
import io
import json
import logging
from pathlib import Path
from typing import List
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from ..core.scanner import ImageScanner
from ..core.mutator import FileMutator
from ..core.workspace import WorkspaceBootstrapper, validate_workspace_path, workspace_name_from_path
from ..core.image_access import image_absolute_path
from ..core.models import ImageFile, MoveRequest, RenameRequest
from ..core.paths import PathResolver
from ..core.exceptions import (
    ImagesManagerError, FileSystemError, PathNotFoundError, WorkspaceNotFoundError,
    PathNotDirectoryError, SourceMissingError, TargetExistsError, InvalidPathError,
    IOFailureError
)

console = Console()


@click.group()
@click.version_option(version="0.1.0")
@click.option('--config', '-c', type=click.Path(path_type=Path),
              help='Configuration file path')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set logging level (overrides config)')
@click.option('--log-file', type=click.Path(path_type=Path),
              help='Log file path (overrides config)')
@click.pass_context
def cli(ctx, config, log_level, log_file):
    """Images Manager - scan and organize the images of a workspace."""
    from ..core.config import setup_config, LoggingConfig
    from ..core.logging_config import setup_logging

    config_manager = setup_config(config)
    app_config = config_manager.get_config()

    if log_level or log_file:
        logging_config = LoggingConfig(
            level=log_level or app_config.logging.level,
            file_path=log_file or app_config.logging.file_path,
            file_enabled=app_config.logging.file_enabled,
            console_enabled=app_config.logging.console_enabled,
            format=app_config.logging.format,
            file_max_size_mb=app_config.logging.file_max_size_mb,
            file_backup_count=app_config.logging.file_backup_count
        )
    else:
        logging_config = app_config.logging

    logging_manager = setup_logging(logging_config)
    if logging_config.level.upper() == 'DEBUG':
        logging_manager.enable_debug_logging()
        logging_manager.log_system_info()
    if app_config.mutations.audit_enabled and logging_config.file_enabled:
        logging_manager.create_audit_logger()

    ctx.ensure_object(dict)
    ctx.obj['config'] = app_config
    ctx.obj['config_manager'] = config_manager


@cli.command()
@click.argument("workspace", type=click.Path(path_type=Path))
def init(workspace: Path):
    """Prepare the control directory of a workspace."""
    try:
        db_path = WorkspaceBootstrapper().ensure_structure(workspace)
        console.print(f"[bold green]✓ Workspace ready[/bold green]: {workspace}")
        console.print(f"Workspace database location: [cyan]{db_path}[/cyan]")
    except ImagesManagerError as e:
        handle_cli_error(e, "init")
        raise click.Abort()


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
def validate(path: Path):
    """Check that a path can be used as a workspace."""
    try:
        validate_workspace_path(path)
        name = workspace_name_from_path(path.resolve())
        console.print(f"[bold green]✓ Valid workspace[/bold green]: [cyan]{name}[/cyan] ({path.resolve()})")
    except ImagesManagerError as e:
        handle_cli_error(e, "validate")
        raise click.Abort()


@cli.command()
@click.argument("workspace", type=click.Path(path_type=Path))
@click.option("--format", "-f", "output_format", type=click.Choice(["table", "json", "csv"]),
              default="table", help="Output format")
@click.option("--verbose", "-v", is_flag=True, help="Show scan progress")
def scan(workspace: Path, output_format: str, verbose: bool):
    """List the images of a workspace."""
    try:
        if verbose:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                scan_task = progress.add_task("Scanning workspace...", total=None)

                def report(processed, total):
                    progress.update(scan_task, completed=processed, total=total)

                images = ImageScanner(progress_callback=report).scan(workspace)
                progress.update(scan_task, description=f"Scan complete - found {len(images)} images")
        else:
            images = ImageScanner().scan(workspace)

    except ImagesManagerError as e:
        handle_cli_error(e, "scan")
        raise click.Abort()

    _display_images(images, output_format)

    if output_format == "table":
        if images:
            console.print(f"\n[bold green]Found {len(images)} image(s)[/bold green]")
        else:
            console.print("[yellow]No images found in this workspace.[/yellow]")


@cli.command()
@click.argument("workspace", type=click.Path(path_type=Path))
@click.argument("old_path")
@click.argument("new_path")
def move(workspace: Path, old_path: str, new_path: str):
    """Move an image to another relative path inside the workspace."""
    try:
        new_relative = FileMutator().move(MoveRequest(old_path, new_path, str(workspace)))
        console.print(f"[green]✓[/green] Moved {old_path} -> [cyan]{new_relative}[/cyan]")
    except ImagesManagerError as e:
        handle_cli_error(e, "move")
        raise click.Abort()


@cli.command()
@click.argument("workspace", type=click.Path(path_type=Path))
@click.argument("relative_path")
@click.argument("new_name")
def rename(workspace: Path, relative_path: str, new_name: str):
    """Rename an image, keeping it in the same folder."""
    old_name = PathResolver.normalize_separators(relative_path).rstrip("/").rsplit("/", 1)[-1]
    try:
        new_relative = FileMutator().rename(
            RenameRequest(old_name, new_name, relative_path, str(workspace))
        )
        console.print(f"[green]✓[/green] Renamed {relative_path} -> [cyan]{new_relative}[/cyan]")
    except ImagesManagerError as e:
        handle_cli_error(e, "rename")
        raise click.Abort()


@cli.command()
@click.argument("workspace", type=click.Path(path_type=Path))
@click.argument("relative_path")
@click.confirmation_option('--yes', '-y', prompt='This permanently deletes the file. Continue?')
def delete(workspace: Path, relative_path: str):
    """Permanently delete an image."""
    try:
        FileMutator().delete(relative_path, workspace)
        console.print(f"[green]✓[/green] Deleted {relative_path}")
    except ImagesManagerError as e:
        handle_cli_error(e, "delete")
        raise click.Abort()


@cli.command()
@click.argument("workspace", type=click.Path(path_type=Path))
@click.argument("relative_path")
def path(workspace: Path, relative_path: str):
    """Print the absolute path of an image."""
    try:
        click.echo(image_absolute_path(relative_path, workspace))
    except ImagesManagerError as e:
        handle_cli_error(e, "path")
        raise click.Abort()


@cli.command()
@click.option("--port", "-p", type=int, help="Port to run the web server on (default from config)")
@click.option("--host", "-h", help="Host to bind the web server to (default from config)")
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def web(ctx, port: int, host: str, debug: bool):
    """Start the JSON API server."""
    from ..web.app import create_app

    web_config = ctx.obj['config'].web
    host = host or web_config.host
    port = port or web_config.port
    debug = debug or web_config.debug

    console.print("[bold blue]Starting Images Manager API...[/bold blue]")
    console.print(f"Server: http://{host}:{port}/api")
    console.print(f"Debug mode: {'enabled' if debug else 'disabled'}")
    console.print("\n[bold green]Press Ctrl+C to stop the server[/bold green]\n")

    app = create_app({
        'DEBUG': debug,
        'MAX_CONTENT_LENGTH': web_config.max_content_length
    })

    try:
        app.run(host=host, port=port, debug=debug, threaded=True)
    except KeyboardInterrupt:
        console.print("\n[bold yellow]Server stopped by user[/bold yellow]")
    except OSError as e:
        console.print(f"[bold red]Error starting web server: {e}[/bold red]")
        raise click.Abort()


@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command('show')
@click.pass_context
def show_config(ctx):
    """Show current configuration."""
    app_config = ctx.obj['config']

    console.print("[bold blue]Current Configuration:[/bold blue]\n")

    console.print("[bold]Web:[/bold]")
    console.print(f"  Host: {app_config.web.host}")
    console.print(f"  Port: {app_config.web.port}")
    console.print(f"  Debug: {app_config.web.debug}")
    console.print(f"  Max content length: {app_config.web.max_content_length} bytes")

    console.print("\n[bold]Logging:[/bold]")
    console.print(f"  Level: {app_config.logging.level}")
    console.print(f"  File enabled: {app_config.logging.file_enabled}")
    console.print(f"  File path: {app_config.logging.file_path}")
    console.print(f"  File max size: {app_config.logging.file_max_size_mb}MB")
    console.print(f"  File backup count: {app_config.logging.file_backup_count}")
    console.print(f"  Console enabled: {app_config.logging.console_enabled}")

    console.print("\n[bold]Mutations:[/bold]")
    console.print(f"  Audit log enabled: {app_config.mutations.audit_enabled}")


@config.command('set')
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_config(ctx, key, value):
    """Set a configuration value. Use dot notation for nested keys (e.g., web.port)."""
    config_manager = ctx.obj['config_manager']
    app_config = ctx.obj['config']

    try:
        keys = key.split('.')
        if len(keys) != 2:
            raise ValueError("Key must be in format 'section.key' (e.g., 'web.port')")

        section, setting = keys
        current_value = getattr(getattr(app_config, section, None), setting, None)

        if isinstance(current_value, bool):
            converted_value = value.lower() in ('true', '1', 'yes', 'on')
        elif isinstance(current_value, int):
            converted_value = int(value)
        elif isinstance(current_value, float):
            converted_value = float(value)
        elif isinstance(current_value, Path):
            converted_value = Path(value)
        else:
            converted_value = value

        config_manager.update_config(section, **{setting: converted_value})

        console.print(f"[green]✓[/green] Set {key} = {converted_value}")

    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()


@config.command('reset')
@click.confirmation_option(prompt='Are you sure you want to reset all configuration to defaults?')
@click.pass_context
def reset_config(ctx):
    """Reset configuration to default values."""
    ctx.obj['config_manager'].reset_to_defaults()
    console.print("[green]✓ Configuration reset to defaults[/green]")


@config.command('export')
@click.argument('file_path', type=click.Path(path_type=Path))
@click.pass_context
def export_config(ctx, file_path):
    """Export configuration to JSON file."""
    try:
        ctx.obj['config_manager'].export_to_json(file_path)
        console.print(f"[green]✓ Configuration exported to {file_path}[/green]")
    except OSError as e:
        console.print(f"[red]Error exporting configuration:[/red] {e}")
        raise click.Abort()


def _display_images(images: List[ImageFile], output_format: str):
    """Display scanned images in the specified format."""
    if output_format == "json":
        click.echo(json.dumps([image.to_dict() for image in images], indent=2))

    elif output_format == "csv":
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["Name", "Relative Path", "Size", "Extension", "Created", "Modified"])
        for image in images:
            writer.writerow([
                image.name,
                image.relative_path,
                image.file_size,
                image.extension,
                image.created_at.isoformat(),
                image.modified_at.isoformat()
            ])
        click.echo(output.getvalue().strip())

    elif images:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Name", style="cyan", no_wrap=False, max_width=30)
        table.add_column("Type", style="green", justify="center")
        table.add_column("Size", justify="right")
        table.add_column("Modified", style="blue")
        table.add_column("Relative Path", style="dim", no_wrap=False, max_width=50)

        for image in sorted(images, key=lambda item: item.relative_path):
            table.add_row(
                image.name,
                image.extension,
                _format_file_size(image.file_size),
                image.modified_at.astimezone().strftime("%Y-%m-%d %H:%M"),
                image.relative_path
            )

        console.print(table)


def _format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format."""
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f}KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f}MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f}GB"


def handle_cli_error(error: Exception, operation: str = "operation") -> None:
    """
    Handle CLI errors with appropriate user feedback.

    Args:
        error: The exception that occurred
        operation: Description of the operation that failed
    """
    if isinstance(error, WorkspaceNotFoundError):
        console.print(f"[bold red]Workspace Not Found:[/bold red] {error}")
        console.print("[yellow]Please check that the workspace directory exists.[/yellow]")
    elif isinstance(error, SourceMissingError):
        console.print(f"[bold red]Missing File:[/bold red] {error}")
        console.print("[yellow]The file may have been moved or deleted since the last scan. Rescan the workspace.[/yellow]")
    elif isinstance(error, PathNotFoundError):
        console.print(f"[bold red]Error:[/bold red] {error}")
        console.print("[yellow]Please check that the path exists and is accessible.[/yellow]")
    elif isinstance(error, PathNotDirectoryError):
        console.print(f"[bold red]Not A Directory:[/bold red] {error}")
    elif isinstance(error, TargetExistsError):
        console.print(f"[bold red]Target Exists:[/bold red] {error}")
        console.print("[yellow]Choose another name or location; existing files are never overwritten.[/yellow]")
    elif isinstance(error, InvalidPathError):
        console.print(f"[bold red]Invalid Path:[/bold red] {error}")
        console.print("[yellow]Paths must be relative to the workspace root and stay inside it.[/yellow]")
    elif isinstance(error, IOFailureError):
        console.print(f"[bold red]File System Error:[/bold red] {error}")
        console.print("[yellow]Please check file system permissions and available space.[/yellow]")
    elif isinstance(error, (FileSystemError, ImagesManagerError)):
        console.print(f"[bold red]Error:[/bold red] {error}")
    else:
        console.print(f"[bold red]Unexpected Error:[/bold red] {error}")
        console.print("[yellow]An unexpected error occurred. Please check the logs for more details.[/yellow]")

    logging.getLogger(__name__).error(f"CLI error in {operation}: {error}")


if __name__ == "__main__":
    cli()
