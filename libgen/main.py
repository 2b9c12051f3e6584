"""
libgen — CLI entrypoint.

Usage:
    python -m libgen.main --help
    python -m libgen.main library my-lib --directory shared
    python -m libgen.main workspace check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from click.core import ParameterSource
from pydantic.alias_generators import to_camel

from libgen import __version__
from libgen.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="libgen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--workspace",
    "-w",
    "workspace_path",
    type=click.Path(exists=False, file_okay=False),
    default=None,
    help="Workspace root (default: auto-detect from workspace.json).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    workspace_path: str | None,
) -> None:
    """libgen — scaffold libraries in a monorepo workspace."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    from libgen.core.config.loader import find_workspace_root
    from libgen.core.context import set_workspace_root

    root = Path(workspace_path).resolve() if workspace_path else find_workspace_root()
    ctx.obj["workspace_root"] = root
    set_workspace_root(root)

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(debug=debug, verbose=verbose, quiet=quiet)


# Parameters of ``library`` that are not generator options
_NON_OPTION_PARAMS = {"dry_run", "as_json"}

_CHANGE_STYLES = {
    "create": ("CREATE", "green"),
    "update": ("UPDATE", "yellow"),
    "delete": ("DELETE", "red"),
}


@cli.command()
@click.argument("name")
@click.option("--directory", "-d", default=None, help="Directory the library is placed in (under libs).")
@click.option("--importPath", "--import-path", "import_path", default=None,
              help="The library name used to import it, like @myorg/my-awesome-lib.")
@click.option("--tags", "-t", default=None, help="Comma-separated tags (used for linting).")
@click.option("--publishable", is_flag=True, help="Generate a publishable library.")
@click.option("--buildable", is_flag=True, help="Generate a buildable library.")
@click.option("--js", is_flag=True, help="Generate JavaScript files rather than TypeScript.")
@click.option("--unitTestRunner", "--unit-test-runner", "unit_test_runner",
              type=click.Choice(["jest", "none"]), default="jest", help="Test runner for unit tests.")
@click.option("--rootDir", "--root-dir", "root_dir", default=None,
              help="Sets the rootDir for TypeScript compilation.")
@click.option("--testEnvironment", "--test-environment", "test_environment",
              type=click.Choice(["node", "jsdom"]), default="node", help="Jest test environment.")
@click.option("--linter", type=click.Choice(["eslint", "none"]), default="eslint", help="Linter to configure.")
@click.option("--strict/--no-strict", default=True, help="Enable strict TypeScript options.")
@click.option("--skipFormat", "--skip-format", "skip_format", is_flag=True, help="Skip formatting files.")
@click.option("--skipTsConfig", "--skip-ts-config", "skip_ts_config", is_flag=True,
              help="Don't map the import path in tsconfig.base.json.")
@click.option("--dry-run", is_flag=True, help="Show the changes without writing them.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def library(ctx: click.Context, name: str, dry_run: bool, as_json: bool, **_: object) -> None:
    """Create a node library in the workspace.

    Examples:

        libgen library utils --directory shared

        libgen library api-client --publishable --importPath @myorg/api-client
    """
    from libgen.core.use_cases.generate import generate_library

    # Only what was actually given on the command line overrides libgen.yml
    explicit = {
        to_camel(param): value
        for param, value in ctx.params.items()
        if param not in _NON_OPTION_PARAMS
        and ctx.get_parameter_source(param) is not ParameterSource.DEFAULT
    }
    explicit["name"] = name

    result = generate_library(
        explicit,
        workspace_root=ctx.obj.get("workspace_root"),
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    options = result.options
    if result.error or options is None:
        click.secho(f"❌ {result.error or 'No library was generated'}", fg="red", err=True)
        sys.exit(1)

    if not ctx.obj.get("quiet"):
        label = "[dry-run] " if dry_run else ""
        click.secho(f"\n📦 {label}{options.name}", fg="cyan", bold=True)
        click.echo(f"   Root:        {options.project_root}")
        click.echo(f"   Import path: {options.import_path}")
        if options.parsed_tags:
            click.echo(f"   Tags:        {', '.join(options.parsed_tags)}")
        click.echo()

    for change in result.changes:
        verb, color = _CHANGE_STYLES[change.kind]
        click.secho(f"   {verb} ", fg=color, nl=False)
        click.echo(change.path)

    if dry_run:
        click.echo()
        click.secho("   NOTE: dry run, no changes were written.", fg="yellow")

    click.echo()


# ── Register sub-command groups from libgen/ui/cli/ ───────────────

from libgen.ui.cli.workspace import workspace  # noqa: E402

cli.add_command(workspace)


if __name__ == "__main__":
    cli()
