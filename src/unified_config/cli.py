"""CLI adapter for ``unified_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators inspect and edit configuration files of any supported format
from a shell, using the same path expressions as the library.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_detect` – prints which adapter owns a file.
* :func:`cli_get` / :func:`cli_get_value` – read by query string or key
  sequence.
* :func:`cli_set` / :func:`cli_set_value` – write, then save.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer: every command goes through
:class:`unified_config.core.ConfigManager` and never touches adapters
directly. Library errors (``UnsupportedFormat``, ``InvalidFormat``...) are
left to ``lib_cli_exit_tools`` so exit codes stay consistent.
"""

from __future__ import annotations

import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import ConfigManager

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DIST_NAME: Final[str] = "unified_config"

_CONFIG_FILE = click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True)
_OUTPUT_OPTION = click.option(
    "--output",
    "output",
    type=click.Path(path_type=Path, file_okay=True, dir_okay=False, writable=True),
    default=None,
    help="Write the result here instead of overwriting FILE",
)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version(_DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Read and write XML, INI, JSON, TOML and YAML configuration by path",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DIST_NAME,
    message="unified_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DIST_NAME)
    except metadata.PackageNotFoundError:
        click.echo(f"{_DIST_NAME} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DIST_NAME)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("detect", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("file", type=_CONFIG_FILE)
def cli_detect(file: Path) -> None:
    """Print the format adapter selected for FILE.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "service.cfg"
    >>> _ = target.write_text("[service]\\nport = 8080\\n", encoding="utf-8")
    >>> CliRunner().invoke(cli, ["detect", str(target)]).output.strip()
    'ini'
    >>> tmp.cleanup()
    """

    click.echo(ConfigManager(file).format_name)


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("file", type=_CONFIG_FILE)
@click.argument("query")
def cli_get(file: Path, query: str) -> None:
    """Print the value at QUERY (XPath for XML, ``section/key`` style otherwise)."""

    _echo_value(ConfigManager(file).get(query), query)


@cli.command("get-value", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("file", type=_CONFIG_FILE)
@click.argument("keys", nargs=-1, required=True)
def cli_get_value(file: Path, keys: Sequence[str]) -> None:
    """Print the value found by walking KEYS one nesting level at a time."""

    _echo_value(ConfigManager(file).get_value(*keys), "/".join(keys))


@cli.command("set", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("file", type=_CONFIG_FILE)
@click.argument("query")
@click.argument("value")
@_OUTPUT_OPTION
def cli_set(file: Path, query: str, value: str, output: Optional[Path]) -> None:
    """Set QUERY to VALUE and save FILE (or ``--output``)."""

    manager = ConfigManager(file)
    if not manager.set(query, value):
        raise click.ClickException(f"Cannot set {query!r} in {file}")
    manager.save(output)


@cli.command("set-value", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("file", type=_CONFIG_FILE)
@click.argument("value")
@click.argument("keys", nargs=-1, required=True)
@_OUTPUT_OPTION
def cli_set_value(file: Path, value: str, keys: Sequence[str], output: Optional[Path]) -> None:
    """Set the key sequence KEYS to VALUE and save FILE (or ``--output``)."""

    manager = ConfigManager(file)
    if not manager.set_value(value, *keys):
        raise click.ClickException(f"Cannot set {'/'.join(keys)!r} in {file}")
    manager.save(output)


def _echo_value(value: Optional[str], location: str) -> None:
    """Print *value* or fail with exit code 1 when it is absent."""

    if value is None:
        raise click.ClickException(f"No value at {location!r}")
    click.echo(value)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DIST_NAME,
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
