"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click

from ZoteroPublications.cli.runner import CommandRunner
from ZoteroPublications.config import AppConfig, load_config_with_defaults
from ZoteroPublications.config.display import check_display
from ZoteroPublications.core.models import EXPAND_ALL

_INPUT = click.argument("input_path", type=click.Path(path_type=Path, dir_okay=False, exists=True))
_GROUP = click.option(
    "--group",
    type=click.Choice(["none", "type"]),
    default=None,
    help="Override display.group.",
)
_EXPAND = click.option(
    "--expand",
    multiple=True,
    help='Item type to show pre-expanded (repeatable), or "all". Overrides display.expand.',
)


@click.group(help="ZoteroPublications: render Zotero records as grouped HTML.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML config merged over the packaged defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """CLI entry group.

    Args:
        ctx: Click context.
        config_path: Optional path to a YAML config file.
    """
    ctx.obj = load_config_with_defaults(config_path)


@cli.command("render")
@_INPUT
@click.option("--details", "details_key", default=None, help="Open the detail view of this record key.")
@_GROUP
@_EXPAND
@click.pass_context
def render_cmd(
    ctx: click.Context,
    input_path: Path,
    details_key: str | None,
    group: str | None,
    expand: tuple[str, ...],
) -> None:
    """Render records from INPUT_PATH (Zotero API JSON) into an HTML page.

    Raises:
        click.Abort: When rendering fails.
    """
    cfg = _apply_overrides(ctx.obj, group, expand)
    CommandRunner(cfg).run_render(ctx.command.name, input_path, details_key)


@cli.command("summary")
@_INPUT
@_GROUP
@_EXPAND
@click.pass_context
def summary_cmd(ctx: click.Context, input_path: Path, group: str | None, expand: tuple[str, ...]) -> None:
    """Print an outline of the records in INPUT_PATH.

    Raises:
        click.Abort: When loading or grouping fails.
    """
    cfg = _apply_overrides(ctx.obj, group, expand)
    CommandRunner(cfg).run_summary(ctx.command.name, input_path)


def _apply_overrides(cfg: AppConfig, group: str | None, expand: tuple[str, ...]) -> AppConfig:
    display = cfg.display
    if group is not None:
        display = replace(display, group=group)
    if expand:
        display = replace(display, expand=EXPAND_ALL if EXPAND_ALL in expand else tuple(expand))
    if display is cfg.display:
        return cfg
    try:
        check_display(display)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    return replace(cfg, display=display)
