"""
nx-decorate — CLI entrypoint.

Usage:
    decorate-angular-cli                 # postinstall hook, no arguments
    python -m nxdecorate.main --help
    python -m nxdecorate.main apply --dry-run
    python -m nxdecorate.main status
    python -m nxdecorate.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from nxdecorate import __version__
from nxdecorate.core.observability.logging_config import setup_logging

SUCCESS_TITLE = "Patching of the Angular CLI completed successfully"
FAILURE_TITLE = "Patching of the Angular CLI did not complete successfully"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="nx-decorate")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to decorate.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """nx-decorate — route Angular CLI invocations through the Nx CLI.

    Without a command, runs 'apply'.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("NXD_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("NXD_LOG_FILE"),
        log_file_level=os.environ.get("NXD_LOG_FILE_LEVEL"),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(apply)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--dry-run", is_flag=True, help="Validate every step but change nothing.")
@click.option("--strict", is_flag=True, help="Exit 1 if any step failed.")
@click.pass_context
def apply(ctx: click.Context, as_json: bool = False, dry_run: bool = False, strict: bool = False) -> None:
    """Link ng to nx, patch the Angular CLI, and update package.json.

    Every step is attempted even if an earlier one failed. By default
    the exit code is 0 so a failed step never breaks the install.
    """
    from nxdecorate.core.use_cases.decorate import run_decorate

    result = run_decorate(
        config_path=ctx.obj.get("config_path"),
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error or (strict and not result.ok):
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    report = result.report
    assert report is not None
    quiet = ctx.obj.get("quiet", False)

    if not quiet:
        mode_label = "[dry-run] " if dry_run else ""
        click.secho(f"\n⚡ {mode_label}nx-decorate — {result.project_root}", fg="cyan", bold=True)
        click.echo()

    for step, receipt in report.steps.items():
        if receipt.ok:
            if quiet:
                continue
            click.secho(f"   ✓ {step}", fg="green", nl=False)
            click.echo(f"  {receipt.output}" if receipt.output else "")
        elif receipt.failed:
            click.secho(f"   ✗ {step}", fg="red", err=True)
            for line in (receipt.error or "").split("\n")[:5]:
                click.echo(f"     │ {line}", err=True)
        elif not quiet:
            click.secho(f"   ⊘ {step} ", fg="yellow", nl=False)
            click.echo(f"({receipt.output})")

    click.echo()
    if report.all_ok:
        if not quiet:
            click.secho(f"   {SUCCESS_TITLE}", fg="green", bold=True)
            click.echo()
        return

    click.secho(
        f"   {FAILURE_TITLE} ({report.failed}/{report.total} steps failed)",
        fg="red",
        bold=True,
        err=True,
    )
    click.echo()
    if strict:
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show whether the link, bootstrap patch and manifest are in place."""
    from nxdecorate.core.use_cases.status import get_status

    result = get_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho(f"\n📋 {result.project_root}", fg="cyan", bold=True)
    click.echo()
    for artifact in result.artifacts:
        if artifact.applied:
            click.secho(f"   ✓ {artifact.name}", fg="green", nl=False)
        else:
            click.secho(f"   ✗ {artifact.name}", fg="yellow", nl=False)
        click.echo(f"  {artifact.path}  ({artifact.detail})")

    click.echo()
    if result.fully_applied:
        click.secho("   Decoration is fully applied", fg="green", bold=True)
    else:
        click.secho("   Run 'nx-decorate apply' to finish decorating", fg="yellow")
    click.echo()


@cli.group()
def config() -> None:
    """Decorator configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate decorate.yml configuration."""
    from nxdecorate.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Link:      {result.config.link_path} -> {result.config.link_target}")
        click.echo(f"   Bootstrap: {result.config.bootstrap_path}")
        click.echo(f"   Manifest:  {result.config.manifest_path}")
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

    click.echo()


def decorate_main() -> None:
    """Zero-argument entry point run by the postinstall hook."""
    cli.main(args=["apply"], prog_name="decorate-angular-cli")


if __name__ == "__main__":
    cli()
