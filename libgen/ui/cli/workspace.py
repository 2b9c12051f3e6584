"""
CLI commands for the workspace itself.

Thin wrappers over ``libgen.core.use_cases.workspace_check``.
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def workspace() -> None:
    """Workspace manifests — validate what generators depend on."""


@workspace.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def workspace_check(ctx: click.Context, as_json: bool) -> None:
    """Validate workspace.json, nx.json and libgen.yml."""
    from libgen.core.use_cases.workspace_check import check_workspace

    result = check_workspace(workspace_root=ctx.obj.get("workspace_root"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.secho("✅ Workspace is valid", fg="green", bold=True)
        click.echo(f"   Root:      {result.workspace_root}")
        click.echo(f"   Projects:  {result.project_count}")
        click.echo(f"   Libs dir:  {result.libs_dir}")
        click.echo(f"   npm scope: {result.npm_scope or '(none)'}")
    else:
        click.secho("❌ Workspace errors:", fg="red", bold=True, err=True)
        for err in result.errors:
            click.echo(f"   • {err}", err=True)

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()
