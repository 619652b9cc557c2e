"""Install and deploy commands."""

import functools
import os

import click
import requests
from dotenv import dotenv_values, set_key

from ..api.errors import SentryApiError
from ..console import ClickConsole
from ..monitoring import capture_errors
from ..plugin import SentryPlugin


def _plugin(ctx):
    return SentryPlugin(config=ctx.obj['config'], console=ClickConsole())


def _read_env(path):
    """Variables of a dotenv file, empty when the file does not exist."""
    if not path or not os.path.exists(path):
        return {}
    return dotenv_values(path)


def _echo_environment(variables):
    for key, value in variables.items():
        click.echo(f"{key}={value}")


def _write_environment(path, variables):
    for key, value in variables.items():
        set_key(path, key, str(value))
    click.echo(click.style(f"Wrote {len(variables)} variable(s) to {path}", fg='green'))


def handle_api_errors(func):
    """Turn Sentry API and network failures into a red message and exit status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SentryApiError as e:
            click.echo(click.style(f"Sentry error: {e}", fg='red'), err=True)
        except requests.RequestException as e:
            click.echo(click.style(f"Network error: {e}", fg='red'), err=True)
        raise SystemExit(1)
    return wrapper


@click.command()
@click.option('--write', is_flag=True, help='Store the variables in the env file')
@click.pass_context
@handle_api_errors
@capture_errors(step_name="install")
def install(ctx, write):
    """Print Laravel config edits and optionally set up a Sentry project."""
    plugin = _plugin(ctx)
    config = ctx.obj['config']

    click.echo("=" * 60)
    click.echo(f"Sentry PHP install: {config.app_name}")
    click.echo("=" * 60)

    result = plugin.install()

    click.echo("\nComposer packages:")
    for package in plugin.required_composer_packages():
        click.echo(f"  composer require {package}")

    click.echo("\nConfig updates:")
    for key, value in result.config_updates.items():
        click.echo(f"  {key} = {value!r}")

    click.echo("\nVendor publish:")
    for publish in result.vendor_publishes:
        click.echo(f"  {publish.command}")

    if not result.environment:
        click.echo(click.style("\nSentry project setup skipped.", fg='yellow'))
        return

    click.echo("\nEnvironment:")
    _echo_environment(result.environment)

    if write:
        _write_environment(config.env_file, result.environment)


@click.command()
@click.option('--site-env', default=None, help='Env file of the deployed site (skips setup if it has a DSN)')
@click.option('--write', is_flag=True, help='Store the variables in the env file')
@click.pass_context
@handle_api_errors
@capture_errors(step_name="deploy")
def deploy(ctx, site_env, write):
    """Resolve the Sentry DSN for a deployment."""
    plugin = _plugin(ctx)
    config = ctx.obj['config']

    if not plugin.should_deploy(_read_env(site_env)):
        click.echo(click.style("Site already has a Sentry DSN, nothing to deploy.", fg='yellow'))
        return

    result = plugin.deploy(_read_env(config.env_file))
    _echo_environment(result.environment)

    if write:
        _write_environment(config.env_file, result.environment)


@click.command()
@click.pass_context
@handle_api_errors
@capture_errors(step_name="env")
def env(ctx):
    """Set up a Sentry project and print KEY=value lines."""
    plugin = _plugin(ctx)
    session = plugin.setup_sentry()
    _echo_environment(plugin.environment_variables(session))
