"""
ghr-installer — CLI entrypoint.

Usage:
    ghri --help
    ghri install owner/project@1.2.3 --base-directory ~/.ghri
    ghri resolve owner/project@1.2.3 --base-directory ~/.ghri
    ghri config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from ghr_installer import __version__
from ghr_installer.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="ghri")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to ghr-installer.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Install GitHub release assets for this host."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        quiet_third_party=not debug,
    )


@cli.group()
def config() -> None:
    """Installer configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate ghr-installer.yml and show the effective settings."""
    from ghr_installer.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   File:    {result.config_path or '(defaults)'}")
        click.echo(f"   API:     {result.config.api_url}")
        click.echo(f"   Host:    {result.config.host}")
        timeout = result.config.timeout
        click.echo(f"   Timeout: {f'{timeout:g}s' if timeout else 'none'}")
        click.echo(f"   Token:   ${result.config.token_env} ({'set' if result.token_present else 'unset'})")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)


# ── Register sub-commands from ghr_installer/ui/cli/ ──────────────

from ghr_installer.ui.cli.install import install, resolve  # noqa: E402

cli.add_command(install)
cli.add_command(resolve)


if __name__ == "__main__":
    cli()
