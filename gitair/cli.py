#!/usr/bin/env python3

import logging

import click

from gitair import __version__
from gitair.config import SyncConfig, load_config, logger
from gitair.exit_codes import ConfigError, INTERRUPTED, SUCCESS
from gitair.render import render_banner, render_repositories
from gitair.services import (
    RepositoryClassifier,
    RepositoryLocator,
    ReconciliationScheduler,
)

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


def _configure_logging(config, verbose):
    logging_config = config.get('logging', {})
    level_name = str(logging_config.get('level', 'WARNING')).upper()
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)
    logger.setLevel(level)

    log_format = logging_config.get('format')
    if log_format:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(logging.Formatter(log_format))


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option('-i', '--interval', 'interval', metavar='MINS',
              help='Check interval in minutes (0.5-30). Default: 0.5 (30 seconds)')
@click.option('-mr', '--monorepo', 'monorepo', is_flag=True,
              help='Force monorepo mode (auto-detects if not set)')
@click.option('-ai', '--ai-commits', 'ai_commits', is_flag=True,
              help='Use AI-generated commit messages (falls back to timestamp on error)')
@click.option('-r', '--root', 'root', type=click.Path(file_okay=False),
              help='Directory to search for repositories (default: current directory)')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
@click.version_option(__version__, prog_name='gitair')
@click.pass_context
def cli(ctx, interval, monorepo, ai_commits, root, verbose):
    """Git Air - Automatic Git synchronization service.

    Discovers every Git repository under the current directory, then
    forever: commits local changes, pushes them to ALL configured
    remotes, and pulls updates from remotes that moved.

    \b
    Examples:
      gitair                  # Run with default 30 second interval
      gitair -i 1             # Check every 1 minute
      gitair -i 5 -mr         # Check every 5 minutes, force monorepo
      gitair -ai              # Use AI-generated commit messages
    """
    config = load_config()
    _configure_logging(config, verbose)

    try:
        settings = SyncConfig.from_config(
            config,
            interval=interval,
            force_composite=monorepo or None,
            use_ai=ai_commits or None,
            root=root,
        )
    except ConfigError as e:
        click.echo(f"❌ Error: {e}\n", err=True)
        click.echo(ctx.get_help(), err=True)
        ctx.exit(e.exit_code)

    render_banner(settings)

    repos = RepositoryLocator(settings.skip_directories).discover(settings.root)
    if not repos:
        click.echo("⚠️  No Git repositories found in current directory")
        click.echo("💡 Make sure you're in a directory containing Git repositories")
        ctx.exit(SUCCESS)

    classifier = RepositoryClassifier(settings.force_composite)
    render_repositories(repos, classifier)

    scheduler = ReconciliationScheduler(settings, repos, classifier=classifier)
    try:
        for line in scheduler.run():
            click.echo(line)
    except KeyboardInterrupt:
        click.echo("\nStopped", err=True)
        ctx.exit(INTERRUPTED)


def main():
    cli()

if __name__ == "__main__":
    main()
