"""
CLI commands for installing release assets.

Thin wrappers over ``ghr_installer.core.use_cases.install``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

_base_directory_option = click.option(
    "--base-directory",
    "-d",
    "base_directory",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Root of the metadata/, downloads/ and installs/ trees.",
)
_json_option = click.option(
    "--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.",
)


def _progress(ctx: click.Context, as_json: bool):
    """Progress sink: stdout unless quiet or emitting JSON."""
    if as_json or ctx.obj.get("quiet"):
        return lambda _msg: None
    return click.echo


@click.command()
@click.argument("package_spec", metavar="OWNER/PROJECT@VERSION")
@_base_directory_option
@_json_option
@click.pass_context
def install(ctx: click.Context, package_spec: str, base_directory: Path, as_json: bool) -> None:
    """Install the release asset matching this host."""
    from ghr_installer.core.use_cases.install import run_install

    result = run_install(
        package_spec,
        base_directory,
        config_path=ctx.obj.get("config_path"),
        progress=_progress(ctx, as_json),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    installed = result.install
    assert installed is not None  # guaranteed after error check above

    if ctx.obj.get("quiet"):
        return

    status = "installed" if installed.changed else "up to date"
    click.secho(f"✅ {installed.spec} {status}", fg="green", bold=True)
    click.echo(f"   Asset:     {installed.package_asset}")
    click.echo(f"   Directory: {installed.install_dir}")
    if installed.manifest_asset:
        click.echo(
            f"   Checksums: {installed.manifest_asset} "
            f"({installed.scope}, {installed.verified} verified)"
        )
    else:
        click.secho("   Checksums: none published", fg="yellow")
    click.echo(f"   Extracted: {installed.extracted} new entries")


@click.command()
@click.argument("package_spec", metavar="OWNER/PROJECT@VERSION")
@_base_directory_option
@_json_option
@click.pass_context
def resolve(ctx: click.Context, package_spec: str, base_directory: Path, as_json: bool) -> None:
    """Show which assets ``install`` would use, without downloading them."""
    from ghr_installer.core.use_cases.install import run_resolve

    result = run_resolve(
        package_spec,
        base_directory,
        config_path=ctx.obj.get("config_path"),
        progress=_progress(ctx, as_json),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    resolved = result.resolved
    assert resolved is not None

    click.secho(f"📦 {resolved.spec} on {resolved.platform}", fg="cyan", bold=True)
    click.echo(f"   Package:   {resolved.package_asset}")
    click.echo(f"   URL:       {resolved.package_url}")
    click.echo(f"   Base name: {resolved.base_name}")
    if resolved.manifest_asset:
        algorithm = resolved.algorithm or "auto"
        click.echo(f"   Checksums: {resolved.manifest_asset} ({resolved.scope}, {algorithm})")
    else:
        click.echo("   Checksums: none published")
