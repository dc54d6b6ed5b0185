"""
KeyCheck CLI
=============

Click-based command-line interface for the KeyCheck key length
classifier. Provides subcommands for evaluating key and certificate
files, scanning TLS endpoints, judging symmetric key sizes, listing the
configured standards and printing year-based recommendations.

Usage::

    python -m keycheck scan server.crt --standard BSI --check-expiry
    python -m keycheck tls https://example.com --ports 443,8443 -t 3s
    python -m keycheck symmetric 128
    python -m keycheck standards
    python -m keycheck recommend --year 2035

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import tomllib
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import click

from keycheck import __version__
from keycheck.core.engine import KeyCheckEngine
from keycheck.core.errors import KeyCheckError
from keycheck.core.models import EvaluationResult, ScanReport
from keycheck.output.console import KeyCheckConsoleOutput
from keycheck.output.report import KeyCheckReportGenerator
from shared.config import KeyLengthConfig
from shared.console import KeyLengthConsole


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.version_option(__version__, prog_name="keycheck")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to KeyLength configuration file (TOML).",
)
@click.option(
    "--standards-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the standards JSON file.",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Output format (default from config, else console).",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file path (for JSON output).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and informational output.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    standards_file: Optional[str],
    output: Optional[str],
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """KeyLength KeyCheck -- Key Length Classifier.

    Measure RSA, ECC and symmetric key lengths from files or live TLS
    endpoints and judge them against NIST, BSI, ANSSI or ECRYPT.
    """
    ctx.ensure_object(dict)

    try:
        keylength_config = KeyLengthConfig.load(config) if config else KeyLengthConfig()
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid configuration file {config}: {exc}") from exc

    output_format = output or keylength_config.keycheck.output_format
    if output_format not in ("console", "json"):
        raise click.ClickException(f"Unsupported output format: {output_format}")

    # Keep stdout clean for JSON documents
    console = KeyLengthConsole(quiet=quiet, stderr=output_format == "json")

    ctx.obj["config"] = keylength_config
    ctx.obj["output_format"] = output_format
    ctx.obj["output_file"] = output_file
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = console
    ctx.obj["engine"] = KeyCheckEngine(keylength_config, standards_file=standards_file)
    ctx.obj["display"] = KeyCheckConsoleOutput(console)
    ctx.obj["reporter"] = KeyCheckReportGenerator()

    if not quiet and output_format == "console":
        console.banner(version=__version__)


def _handle_output(ctx: click.Context, result: Union[EvaluationResult, ScanReport], target: str) -> None:
    """Write *result* as JSON to the output file or stdout."""
    reporter: KeyCheckReportGenerator = ctx.obj["reporter"]
    console: KeyLengthConsole = ctx.obj["console"]
    output_file = ctx.obj["output_file"]

    if output_file:
        path = reporter.generate_json(result, Path(output_file), target=target)
        console.success(f"JSON report saved to: {path}")
    else:
        click.echo(reporter.render(result, target=target))


def _fail(ctx: click.Context, exc: KeyCheckError) -> None:
    ctx.obj["console"].error(str(exc))
    ctx.exit(1)


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--standard", "-s", default=None, help="Security standard (e.g. NIST, BSI).")
@click.option(
    "--check-expiry", "-e",
    is_flag=True,
    default=False,
    help="Report certificate expiry when FILE is a certificate.",
)
@click.pass_context
def scan(ctx: click.Context, file: str, standard: Optional[str], check_expiry: bool) -> None:
    """Evaluate the key in a PEM or DER FILE.

    Accepts RSA public/private keys, EC public keys and X.509
    certificates carrying RSA or ECDSA keys.
    """
    engine: KeyCheckEngine = ctx.obj["engine"]
    display: KeyCheckConsoleOutput = ctx.obj["display"]

    try:
        result = engine.evaluate_file(
            Path(file), standard=standard, check_expiry=check_expiry or None
        )
    except KeyCheckError as exc:
        _fail(ctx, exc)
        return

    if ctx.obj["output_format"] == "console":
        display.display_evaluation(result, source=file)
    else:
        _handle_output(ctx, result, target=file)


@cli.command()
@click.argument("host")
@click.option("--standard", "-s", default=None, help="Security standard (e.g. NIST, BSI).")
@click.option(
    "--ports", "-p",
    default=None,
    help="Comma-separated ports to scan (default 443).",
)
@click.option(
    "--check-expiry", "-e",
    is_flag=True,
    default=False,
    help="Report leaf certificate expiry for each port.",
)
@click.option(
    "--timeout", "-t",
    default=None,
    help="Connection timeout per port, e.g. 5s, 1m30s, 250ms.",
)
@click.pass_context
def tls(
    ctx: click.Context,
    host: str,
    standard: Optional[str],
    ports: Optional[str],
    check_expiry: bool,
    timeout: Optional[str],
) -> None:
    """Scan the leaf certificates a TLS HOST serves on one or more ports.

    Connection, handshake and parse failures are reported per port and
    never stop the scan.
    """
    engine: KeyCheckEngine = ctx.obj["engine"]
    display: KeyCheckConsoleOutput = ctx.obj["display"]
    console: KeyLengthConsole = ctx.obj["console"]

    try:
        with console.status(f"Scanning {host}..."):
            report = engine.scan_tls(
                host,
                ports=ports,
                standard=standard,
                check_expiry=check_expiry or None,
                timeout=timeout,
            )
    except KeyCheckError as exc:
        _fail(ctx, exc)
        return

    if ctx.obj["output_format"] == "console":
        display.display_scan(report)
    else:
        _handle_output(ctx, report, target=report.host)


@cli.command()
@click.argument("bits", type=click.IntRange(min=0))
@click.option("--standard", "-s", default=None, help="Security standard (e.g. NIST, BSI).")
@click.pass_context
def symmetric(ctx: click.Context, bits: int, standard: Optional[str]) -> None:
    """Judge a symmetric key of BITS length (e.g. 128 for AES-128)."""
    engine: KeyCheckEngine = ctx.obj["engine"]
    display: KeyCheckConsoleOutput = ctx.obj["display"]

    try:
        result = engine.evaluate_symmetric(bits, standard=standard)
    except KeyCheckError as exc:
        _fail(ctx, exc)
        return

    if ctx.obj["output_format"] == "console":
        display.display_evaluation(result)
    else:
        _handle_output(ctx, result, target=f"symmetric:{bits}")


@cli.command()
@click.pass_context
def standards(ctx: click.Context) -> None:
    """List the security standards in the standards file."""
    engine: KeyCheckEngine = ctx.obj["engine"]

    try:
        catalog = engine.list_standards()
    except KeyCheckError as exc:
        _fail(ctx, exc)
        return

    if ctx.obj["output_format"] == "console":
        ctx.obj["display"].display_standards(catalog)
    else:
        click.echo(
            KeyCheckReportGenerator.dump_json(
                {"standards": {
                    name: std.model_dump(by_alias=True) for name, std in catalog.items()
                }}
            )
        )


@cli.command()
@click.option("--year", "-y", type=int, default=None, help="Target year (default: current year).")
@click.pass_context
def recommend(ctx: click.Context, year: Optional[int]) -> None:
    """Show recommended minimum key lengths for a year."""
    engine: KeyCheckEngine = ctx.obj["engine"]
    target_year = year if year is not None else datetime.now(timezone.utc).year
    lengths = engine.recommendations(target_year)

    if ctx.obj["output_format"] == "console":
        ctx.obj["display"].display_recommendations(target_year, lengths)
    else:
        click.echo(KeyCheckReportGenerator.dump_json({"year": target_year, **lengths}))


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the KeyCheck CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
