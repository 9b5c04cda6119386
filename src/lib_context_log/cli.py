"""CLI adapter for ``lib_context_log`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators preview what the facade emits without writing Python: the
level table, and the exact line (plus the backend calls) a given log call
produces.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_levels` – prints the level table as JSON.
* :func:`cli_emit` – emits one line through an isolated logger and, with
  ``--prefix``, prints the metric calls a recording backend received.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer. It builds its own :class:`~lib_context_log.context.Logger`
instead of touching the process-wide facade, and ``lib_cli_exit_tools``
centralises the exit code strategy.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.backends.recording import RecordingBackend
from .context import Logger
from .domain.levels import LEVEL_NAMES, level_by_name
from .domain.metrics import EMPTY_METRICS, Metrics
from .domain.settings import LoggerSettings
from .domain.tags import MetricTags, Tags

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

VERB_CHOICES: Final[tuple[str, ...]] = ("trace", "debug", "info", "metric", "warn", "error", "critic")


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("lib_context_log")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Contextual logging and telemetry facade",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_context_log",
    message="lib_context_log version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

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
        meta = metadata.metadata("lib_context_log")
    except metadata.PackageNotFoundError:
        click.echo("lib_context_log (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_context_log')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("levels", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_levels() -> None:
    """Print the accepted ``LOG_LEVEL`` names and their thresholds as JSON."""

    click.echo(json.dumps(dict(LEVEL_NAMES), indent=2))


@cli.command("emit", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("verb", type=click.Choice(VERB_CHOICES, case_sensitive=False))
@click.argument("message")
@click.option("--event", default=None, help="Event label recorded under the 'event' key")
@click.option("--tag", "tags", multiple=True, help="Line tag as key=value (repeatable)")
@click.option("--metric-tag", "metric_tags", multiple=True, help="Metric tag as key=value (repeatable)")
@click.option("--counter", "counters", multiple=True, help="Counter metric name (repeatable)")
@click.option("--full", "fulls", multiple=True, help="Full metric as name=value (repeatable)")
@click.option(
    "--threshold",
    default="TRACE",
    show_default=True,
    help="Level name the isolated logger filters on",
)
@click.option("--prefix", default=None, help="Enable forwarding with this metric prefix")
@click.option("--environment", default="local", show_default=True, help="Value of the 'cluster' metric tag")
def cli_emit(
    verb: str,
    message: str,
    event: Optional[str],
    tags: Sequence[str],
    metric_tags: Sequence[str],
    counters: Sequence[str],
    fulls: Sequence[str],
    threshold: str,
    prefix: Optional[str],
    environment: str,
) -> None:
    """Emit one log line on stdout the way ``LogContext.<verb>`` would.

    With ``--prefix`` the forwarded metric calls are captured by an in-memory
    backend and printed afterwards as a JSON array.
    """

    backend = RecordingBackend()
    logger = Logger(LoggerSettings(level=_parse_threshold(threshold)), backend=backend)
    if prefix is not None:
        logger.push_metrics(prefix, environment)

    arguments: list[object] = []
    if event:
        arguments.append(event)
    if tags:
        arguments.append(Tags(_parse_pairs(tags, "--tag")))
    if metric_tags:
        arguments.append(MetricTags(_parse_pairs(metric_tags, "--metric-tag")))
    batch = _build_metrics(counters, fulls)
    if batch:
        arguments.append(batch)

    getattr(logger.context(), verb.lower())(message, *arguments)
    if prefix is not None:
        click.echo(json.dumps([call.as_dict() for call in backend.calls], indent=2))


def _parse_threshold(name: str) -> int:
    """Translate a level name into a threshold, reporting unknown names as bad parameters."""

    if name.upper() not in LEVEL_NAMES:
        raise click.BadParameter(
            f"Threshold must be one of: {', '.join(LEVEL_NAMES)}.",
            param_hint="--threshold",
        )
    return level_by_name(name)


def _parse_pairs(values: Sequence[str], option: str) -> dict[str, str]:
    """Split ``key=value`` entries; later duplicates win."""

    parsed: dict[str, str] = {}
    for entry in values:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got {entry!r}.", param_hint=option)
        parsed[key] = value
    return parsed


def _build_metrics(counters: Sequence[str], fulls: Sequence[str]) -> Metrics:
    """Assemble the batch described by ``--counter`` and ``--full`` options."""

    batch = EMPTY_METRICS
    for name in counters:
        batch = batch.counter(name)
    for name, raw in _parse_pairs(fulls, "--full").items():
        try:
            batch = batch.full(name, float(raw))
        except ValueError as exc:
            raise click.BadParameter(f"Value of {name!r} is not a number: {raw!r}.", param_hint="--full") from exc
    return batch


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_context_log",
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
