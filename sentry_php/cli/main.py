"""
Sentry PHP setup CLI

Provisions Sentry error monitoring for a Laravel application.

Usage:
    sentry-php [OPTIONS] COMMAND [ARGS]...

Commands:
    install   Print Laravel config edits and optionally set up a project
    deploy    Resolve the DSN for a deployment
    env       Resolve and print the environment variables
"""

import click
import logging
import os
import sys
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from ..config import Config
from ..monitoring import init_sentry


def load_environment(env_file: Optional[str] = None) -> None:
    """
    Load dotenv files into the process environment.

    The explicit env file is read first, then the nearest .env found from the
    working directory. Variables already set in the environment win.
    """
    if env_file and os.path.exists(env_file):
        load_dotenv(env_file)
    load_dotenv(find_dotenv(usecwd=True))


def setup_logging(verbose: bool):
    """Configure logging to output to stderr, keeping stdout for KEY=value output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(message)s',  # Simple format for CLI
        handlers=[logging.StreamHandler(sys.stderr)]
    )


@click.group()
@click.option('--app-name', default=None, help='Application name (defaults to APP_NAME or the directory name)')
@click.option('--env-file', default=None, help='Laravel .env file of the application')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output (show DEBUG logs)')
@click.option('-q', '--quiet', is_flag=True, help='Quiet mode (only show warnings/errors)')
@click.pass_context
def cli(ctx, app_name, env_file, verbose, quiet):
    """Sentry PHP - Set up Sentry error monitoring for Laravel apps."""
    if quiet:
        logging.basicConfig(level=logging.WARNING, format='%(message)s')
    else:
        setup_logging(verbose)

    load_environment(env_file)
    init_sentry()

    config = Config.from_env()
    if app_name:
        config.app_name = app_name
    if env_file:
        config.env_file = env_file

    ctx.ensure_object(dict)
    ctx.obj['config'] = config


from .commands import install, deploy, env

cli.add_command(install)
cli.add_command(deploy)
cli.add_command(env)


if __name__ == '__main__':
    cli()
