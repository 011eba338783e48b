"""CLI adapter for ``lib_service_bindings`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators inspect which bindings a process would see and which
properties they turn into, without writing Python.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – distribution metadata.
* :func:`cli_list` – discovered bindings (names and entry keys, never values).
* :func:`cli_processors` – the registered processors in dispatch order.
* :func:`cli_read` – resulting properties as JSON, optionally layered and
  with provenance.
* :func:`cli_generate_examples` – writes a sample bindings tree.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer: it calls the composition root (:mod:`lib_service_bindings.core`)
and the adapters' public helpers only.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Mapping, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.env.default import DefaultEnvironmentSource
from .adapters.file_loaders.structured import load_layer_file
from .adapters.probes.default import ChainedProbe, ImportProbe, StaticProbe
from .core import collect_properties, load_bindings
from .examples import SAMPLE_BINDINGS
from .examples import generate_examples as _generate_examples
from .processors import default_processors

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DISTRIBUTION: Final[str] = "lib_service_bindings"

_ROOT_OPTION = click.option(
    "--root",
    "roots",
    multiple=True,
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True),
    help="Bindings root directory (repeatable). Defaults to $SERVICE_BINDING_ROOT",
)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Project mounted service bindings into configuration properties",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DISTRIBUTION,
    message="lib_service_bindings version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for ``lib_cli_exit_tools``."""

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo(f"{_DISTRIBUTION} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.11')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("list", context_settings=CLICK_CONTEXT_SETTINGS)
@_ROOT_OPTION
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation")
def cli_list(roots: Sequence[Path], indent: int) -> None:
    """List discovered bindings as JSON (entry names only, values are never printed)."""

    bindings = load_bindings(list(roots) if roots else None)
    payload = [
        {
            "name": binding.name,
            "type": binding.type,
            "provider": binding.provider,
            "path": str(binding.location),
            "entries": sorted(binding.entries),
        }
        for binding in bindings
    ]
    click.echo(json.dumps(payload, indent=indent))


@cli.command("processors", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_processors() -> None:
    """Print the registered processors in dispatch order."""

    payload = [
        {"type": processor.type, "host_version": processor.host_version, "label": processor.label}
        for processor in default_processors()
    ]
    click.echo(json.dumps(payload, indent=2))


@cli.command("read", context_settings=CLICK_CONTEXT_SETTINGS)
@_ROOT_OPTION
@click.option(
    "--capability",
    "capabilities",
    multiple=True,
    help="Component identifier to report as available (repeatable), e.g. org.mariadb.jdbc.Driver",
)
@click.option("--host-version", type=int, default=None, help="Host framework major version for versioned processors")
@click.option(
    "--property",
    "properties",
    multiple=True,
    metavar="KEY=VALUE",
    help="Extra flag visible to the guards (repeatable), e.g. org.springframework.cloud.bindings.boot.redis.enable=false",
)
@click.option(
    "--defaults",
    type=click.Path(path_type=Path, exists=True, dir_okay=False, readable=True),
    default=None,
    help="TOML/JSON/YAML file merged below the binding properties",
)
@click.option(
    "--overrides",
    type=click.Path(path_type=Path, exists=True, dir_okay=False, readable=True),
    default=None,
    help="TOML/JSON/YAML file merged above the binding properties",
)
@click.option("--provenance/--no-provenance", default=False, help="Include the origin of every key")
@click.option("--nested/--flat", default=False, help="Emit nested objects instead of dotted keys")
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_read(
    roots: Sequence[Path],
    capabilities: Sequence[str],
    host_version: Optional[int],
    properties: Sequence[str],
    defaults: Optional[Path],
    overrides: Optional[Path],
    provenance: bool,
    nested: bool,
    indent: Optional[int],
) -> None:
    """Load bindings, run every processor, and print the properties as JSON."""

    environment = DefaultEnvironmentSource(overrides=_parse_properties(properties))
    probe = ChainedProbe(StaticProbe(capabilities), ImportProbe()) if capabilities else None
    result = collect_properties(
        roots=list(roots) if roots else None,
        environment=environment,
        probe=probe,
        host_version=host_version,
        defaults=load_layer_file(defaults) if defaults else None,
        overrides=load_layer_file(overrides) if overrides else None,
    )
    data: Any = result.as_nested() if nested else result.as_dict()
    if provenance:
        data = {"properties": data, "provenance": result.provenance()}
    click.echo(json.dumps(data, indent=indent, separators=(",", ":"), default=str))


@cli.command("generate-examples", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--destination",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True, resolve_path=True),
    required=True,
    help="Directory that will receive the sample bindings",
)
@click.option(
    "--type",
    "types",
    multiple=True,
    type=click.Choice(sorted(SAMPLE_BINDINGS), case_sensitive=True),
    help="Sample binding type to write (repeatable); all when omitted",
)
@click.option(
    "--force/--no-force",
    default=False,
    help="Overwrite existing sample files if set",
    show_default=True,
)
def cli_generate_examples(destination: Path, types: Sequence[str], force: bool) -> None:
    """Write sample binding directories under *destination*."""

    created = _generate_examples(destination, types=list(types) or None, force=force)
    click.echo(json.dumps([str(path) for path in created], indent=2))


def _parse_properties(values: Sequence[str]) -> Mapping[str, str]:
    """Turn ``KEY=VALUE`` strings into a mapping."""

    parsed: dict[str, str] = {}
    for item in values:
        key, separator, value = item.partition("=")
        if not separator or not key.strip():
            raise click.BadParameter(f"Expected KEY=VALUE, got {item!r}", param_hint="--property")
        parsed[key.strip()] = value
    return parsed


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DISTRIBUTION,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
