"""Command-line interface for jsonmend."""

import json
import logging

import click

from jsonmend.config import settings
from jsonmend.core.orchestrator import JsonRecovery
from jsonmend.diagnostics import describe_parse_error, save_debug_file
from jsonmend.models import Success
from jsonmend.tracing import RecoveryTracer

logger = logging.getLogger(__name__)

_INPUT = click.argument("source", type=click.File("r", encoding="utf-8"), default="-")


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level for jsonmend messages on stderr",
)
def cli(log_level: str):
    """Recover JSON from language model output."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )


@cli.command()
@_INPUT
@click.option("--compact", is_flag=True, help="Print JSON on a single line")
@click.option("--trace", is_flag=True, help="Print the stages tried to stderr")
@click.option(
    "--salvage/--no-salvage",
    default=settings.salvage_truncated,
    show_default=True,
    help="Trim trailing prose from an unterminated span when repair alone fails",
)
def parse(source, compact: bool, trace: bool, salvage: bool):
    """Recover a JSON value and print it.

    Exits with status 1 when nothing could be recovered.
    """
    content = source.read()
    debug = settings.debug or logger.isEnabledFor(logging.DEBUG)
    recovery = JsonRecovery(settings.model_copy(update={"salvage_truncated": salvage, "debug": debug}))
    tracer = RecoveryTracer()

    outcome = recovery.recover(content, tracer)

    if trace:
        for event in tracer.get_events():
            status = "ok" if event.succeeded else "miss"
            click.echo(f"{event.stage:>9}  {status:<4}  {event.message}", err=True)

    if not isinstance(outcome, Success):
        raise click.ClickException("No JSON value could be recovered")

    logger.info("Recovered value at stage %s", outcome.stage.value)
    indent = None if compact else 2
    click.echo(json.dumps(outcome.value, indent=indent, ensure_ascii=False))


@cli.command()
@_INPUT
def extract(source):
    """Print the first JSON-shaped span of the input."""
    span = JsonRecovery().extract_json_from_content(source.read())
    if span is None:
        raise click.ClickException("No JSON-shaped span found")
    click.echo(span)


@cli.command()
@_INPUT
def repair(source):
    """Print the input after the repair passes."""
    repaired = JsonRecovery().repair_malformed_json(source.read())
    if repaired is None:
        raise click.ClickException("Input is empty")
    click.echo(repaired)


@cli.command()
@_INPUT
@click.option(
    "--save-debug",
    "save_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Also write the input to a timestamped file in this directory",
)
def diagnose(source, save_dir: str | None):
    """Explain why the input is not strict JSON."""
    content = source.read()
    report = describe_parse_error(content)
    if report is None:
        click.echo("Input is valid JSON")
        return

    click.echo(report.format())
    if save_dir:
        path = save_debug_file(content, save_dir)
        click.echo(f"Problematic JSON saved to {path}")


if __name__ == "__main__":
    cli()
