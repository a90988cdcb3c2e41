# src/flowmap/cli.py
"""flowmap Command Line Interface.

Entry point for inspecting exported flow graphs locally. Reads parsed
JSON from files; fetching from a live server is out of scope.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from flowmap import __version__
from flowmap.core.canonical import CANONICAL_VERSION, canonical_json, flow_map_digest
from flowmap.core.config import FlowMapSettings, LoggingSettings, MapLimitSettings, load_settings
from flowmap.core.flow_map import build_flow_map
from flowmap.core.inventory import inventory_options
from flowmap.core.logging import configure_logging

__all__ = ["app"]

app = typer.Typer(
    name="flowmap",
    help="flowmap: canonical connectivity maps from pipeline flow graphs.",
    no_args_is_help=True,
)


@dataclass(frozen=True, slots=True)
class _LogFlags:
    """Logging flags given on the command line; they win over settings."""

    verbose: bool = False
    json_logs: bool = False


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"flowmap version {__version__}")
        raise typer.Exit()


def _fail(message: str) -> typer.Exit:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    return typer.Exit(1)


def _read_json(path: Path | None) -> Any:
    """Load a JSON file, or None when no path was given."""
    if path is None:
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise _fail(f"File not found: {path}") from None
    except OSError as e:
        raise _fail(f"Cannot read {path}: {e.strerror or e}") from None
    except UnicodeDecodeError as e:
        raise _fail(f"File is not valid UTF-8: {path} ({e.reason} at byte {e.start})") from None
    except json.JSONDecodeError as e:
        raise _fail(f"Invalid JSON in {path}: {e}") from None


def _load_settings(settings: Path | None) -> FlowMapSettings:
    if settings is None:
        return FlowMapSettings()
    try:
        return load_settings(settings.expanduser())
    except FileNotFoundError as e:
        raise _fail(str(e)) from None
    except ValidationError as e:
        typer.secho("Configuration errors:", fg=typer.colors.RED, err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.secho(f"  - {loc}: {error['msg']}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None


def _apply_logging(ctx: typer.Context, settings: LoggingSettings) -> None:
    """Reconfigure logging from settings, keeping --verbose/--json-logs on top."""
    flags = ctx.obj if isinstance(ctx.obj, _LogFlags) else _LogFlags()
    configure_logging(
        json_output=flags.json_logs or settings.json_output,
        level="DEBUG" if flags.verbose else settings.level,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """flowmap: canonical connectivity maps from pipeline flow graphs."""
    ctx.obj = _LogFlags(verbose=verbose, json_logs=json_logs)

    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(json_output=json_logs, level=log_level)


@app.command()
def normalize(
    ctx: typer.Context,
    graph: Path = typer.Argument(..., help="Path to the raw flow-graph JSON."),
    project_key: str = typer.Option(..., "--project-key", "-p", help="Project key to stamp on the map."),
    folders: Path | None = typer.Option(None, "--folders", help="Managed-folder listing JSON ([{id, name}])."),
    datasets: Path | None = typer.Option(None, "--datasets", help="Dataset listing JSON ([{name}])."),
    recipes: Path | None = typer.Option(None, "--recipes", help="Recipe listing JSON ([{name}])."),
    max_nodes: int | None = typer.Option(None, "--max-nodes", min=1, help="Node cap (overrides settings)."),
    max_edges: int | None = typer.Option(None, "--max-edges", min=1, help="Edge cap (overrides settings)."),
    unbounded: bool = typer.Option(False, "--unbounded", help="Disable default caps."),
    settings: Path | None = typer.Option(None, "--settings", "-s", help="Path to settings YAML file."),
    include_raw: bool = typer.Option(False, "--include-raw", help="Embed the raw graph under map.raw."),
    canonical: bool = typer.Option(False, "--canonical", help="Emit RFC 8785 canonical JSON."),
) -> None:
    """Normalize a flow graph and print the bounded map with its truncation summary."""
    config = _load_settings(settings)
    _apply_logging(ctx, config.logging)

    limits = config.limits
    if unbounded:
        limits = MapLimitSettings(max_nodes=None, max_edges=None)

    result = build_flow_map(
        _read_json(graph),
        project_key,
        folders=_read_json(folders),
        datasets=_read_json(datasets),
        recipes=_read_json(recipes),
        max_nodes=max_nodes,
        max_edges=max_edges,
        limits=limits,
        include_raw=include_raw,
    )

    payload = result.to_dict()
    if canonical:
        try:
            typer.echo(canonical_json(payload))
        except ValueError as e:
            raise _fail(str(e)) from None
    else:
        typer.echo(json.dumps(payload, indent=2))


@app.command()
def digest(
    ctx: typer.Context,
    graph: Path = typer.Argument(..., help="Path to the raw flow-graph JSON."),
    project_key: str = typer.Option(..., "--project-key", "-p", help="Project key to stamp on the map."),
    folders: Path | None = typer.Option(None, "--folders", help="Managed-folder listing JSON ([{id, name}])."),
    datasets: Path | None = typer.Option(None, "--datasets", help="Dataset listing JSON ([{name}])."),
    recipes: Path | None = typer.Option(None, "--recipes", help="Recipe listing JSON ([{name}])."),
    settings: Path | None = typer.Option(None, "--settings", "-s", help="Path to settings YAML file."),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the digest with its project key and canonicalization version.",
    ),
) -> None:
    """Print the stable hash of the untruncated normalized map."""
    from flowmap.core.builder import normalize_flow_graph

    _apply_logging(ctx, _load_settings(settings).logging)

    options = inventory_options(
        folders=_read_json(folders),
        datasets=_read_json(datasets),
        recipes=_read_json(recipes),
    )
    flow_map = normalize_flow_graph(_read_json(graph), project_key, options)
    value = flow_map_digest(flow_map)
    if as_json:
        record = {"projectKey": project_key, "digest": value, "canonicalVersion": CANONICAL_VERSION}
        typer.echo(json.dumps(record, indent=2))
    else:
        typer.echo(value)


if __name__ == "__main__":
    app()
