"""Command line interface for gotfiles."""

from pathlib import Path
from typing import Any, List, Optional, Tuple

import click
from rich.console import Console

from .core import commands
from .core.config import CONFIG_FILE, Config
from .core.logging import setup_logging

console = Console()


class GotfilesGroup(click.Group):
    """Command group that exits with status 1 on an unknown command."""

    def resolve_command(
        self, ctx: click.Context, args: List[str]
    ) -> Tuple[Optional[str], Optional[click.Command], List[str]]:
        cmd_name = args[0] if args else None
        if (
            cmd_name is not None
            and not ctx.resilient_parsing
            and not cmd_name.startswith("-")
            and self.get_command(ctx, cmd_name) is None
        ):
            click.echo(f"Unknown command: {cmd_name}")
            click.echo(ctx.get_usage())
            ctx.exit(1)
        return super().resolve_command(ctx, args)


@click.group(cls=GotfilesGroup, invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Configuration file (defaults to ./{CONFIG_FILE}; .yaml/.yml files are read as YAML)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write logs to this file")
@click.pass_context
def cli(
    ctx: click.Context, config_path: Optional[Path], debug: bool, log_file: Optional[str]
) -> None:
    """Back up dotfiles into a Git repository and symlink them back.

    Run gotfiles from the root of a Git repository containing a config.json
    such as {"dotfiles": [".vimrc", ".config/nvim"]}. Tracked paths are
    relative to your home directory.

    Main commands:

      init      Move tracked files into ./dotfiles, symlink them, commit and push
      sync      Same as init, but requires ./dotfiles to exist already
      status    Show tracked files and whether they are linked and backed up

    Run 'gotfiles COMMAND --help' for more information on a specific command.
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_usage())
        ctx.exit(1)

    setup_logging(debug=debug, log_file=log_file)
    ctx.obj = {"config_path": config_path}


def _settings(ctx: click.Context) -> Tuple[Config, Path, Path]:
    """Load the configuration and resolve the home and repository directories.

    Runs inside a subcommand, so options such as --help are handled before
    a missing config.json can abort the command.
    """
    obj: Any = ctx.obj or {}
    repo_dir = Path.cwd()
    config_file = obj.get("config_path") or repo_dir / CONFIG_FILE
    try:
        config = Config.from_file(config_file)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading config file ({config_file}): {e}")
        raise click.Abort()

    try:
        home_dir = commands.resolve_home()
    except RuntimeError as e:
        console.print(f"[red]Error: {e}")
        raise click.Abort()

    return config, repo_dir, home_dir


@cli.command()
@click.option(
    "--dry-run", is_flag=True, help="Show what would be backed up without making any changes"
)
@click.pass_context
def init(ctx: click.Context, dry_run: bool) -> None:
    """Back up tracked files into ./dotfiles and replace them with symlinks.

    The init command will:
    1. Create the ./dotfiles directory if it does not exist
    2. Copy each tracked file or directory from your home into ./dotfiles
    3. Remove the original and symlink it to the copy
    4. Run git add, commit and push in the current directory

    Items that are already symlinks are skipped, so running init again is safe.

    Examples:

      # Back up everything listed in ./config.json
      gotfiles init

      # Show what would happen without changing anything
      gotfiles init --dry-run
    """
    config, repo_dir, home_dir = _settings(ctx)
    try:
        commands.init(config, repo_dir, home_dir, dry_run=dry_run, console=console)
    except OSError as e:
        console.print(f"[red]Error: {e}")
        raise click.Abort()


@cli.command()
@click.option(
    "--dry-run", is_flag=True, help="Show what would be synced without making any changes"
)
@click.pass_context
def sync(ctx: click.Context, dry_run: bool) -> None:
    """Back up new tracked files and restore missing symlinks.

    Requires ./dotfiles to exist (run 'gotfiles init' first). On a fresh
    machine this links every tracked path that is missing from your home to
    its copy in ./dotfiles.

    Examples:

      # Sync and push
      gotfiles sync

      # Use a YAML configuration instead of ./config.json
      gotfiles --config dotfiles.yaml sync
    """
    config, repo_dir, home_dir = _settings(ctx)
    try:
        commands.sync(config, repo_dir, home_dir, dry_run=dry_run, console=console)
    except OSError as e:
        console.print(f"[red]Error: {e}")
        raise click.Abort()


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show each tracked item, its state in your home and whether it is backed up."""
    config, repo_dir, home_dir = _settings(ctx)
    commands.status(config, repo_dir, home_dir, console=console)


def main() -> None:
    """Entry point for the gotfiles CLI."""
    cli(prog_name="gotfiles")


if __name__ == "__main__":
    main()
