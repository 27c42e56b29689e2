"""
smuc CLI - Zen2 SMU Checker

Command-line interface using Click.
"""

import sys
import json
from pathlib import Path

import click
from rich.console import Console
from rich.text import Text

from . import __version__
from .config import ScanConfig, load_config_file
from .firmware import FirmwareAnalyzer, ImageLoader, PatternError, search_pattern


def _format_kb(kb: float, width: int = 0) -> str:
    return f"{kb:,.0f}".rjust(width)


def _progress(verbose: bool):
    """Progress callback that echoes to stderr when verbose"""
    if not verbose:
        return None
    return lambda message: click.echo(message, err=True)


# --------------------------------------------------------------------------
# CLI Group
# --------------------------------------------------------------------------

@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, verbose):
    """smuc - Zen2 SMU Checker

    Reports the AGESA version and the SMU firmware modules
    embedded in AMD BIOS images.
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# --------------------------------------------------------------------------
# BIOS Scanning
# --------------------------------------------------------------------------

@cli.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path())
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.option('-c', '--config', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='Scan configuration file')
@click.pass_context
def scan(ctx, paths, as_json, config_file):
    """Scan BIOS images (or zip archives) for AGESA and SMU versions."""
    verbose = ctx.obj.get('verbose', False) if ctx.obj else False
    try:
        config = load_config_file(config_file) if config_file else ScanConfig()
    except Exception as e:
        click.echo(f"Error: invalid config {config_file}: {e}", err=True)
        sys.exit(1)

    loader = ImageLoader(progress_callback=_progress(verbose), blacklist=config.archive_blacklist)
    analyzer = FirmwareAnalyzer(progress_callback=_progress(verbose),
                                version_window=config.version_window)
    console = Console(highlight=False, soft_wrap=True)

    reports = []
    failed = 0

    for path in paths:
        image = loader.load(path)
        if image is None:
            failed += 1
            if as_json:
                click.echo(f"Could not retrieve bios from {path}", err=True)
            else:
                console.print(Text(f"Could not retrieve bios from {path}", style="red"))
                console.print()
            continue

        report = analyzer.analyze(image.data, name=image.name)
        reports.append(report)

        if as_json:
            continue

        line = f"Scanning: {image.name} ({_format_kb(image.size_kb)} KB)"
        if report.agesa:
            line += f" {report.agesa}"
        console.print(Text(line))

        if report.modules:
            for module in report.modules:
                console.print(Text(
                    f"   {module.version} ({_format_kb(module.length / 1024, 3)} KB) "
                    f"[{module.offset:08X} - {module.end:08X}]",
                    style="green",
                ))
        else:
            console.print(Text("Could not find any smu modules", style="red"))

        console.print()

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in reports], indent=2))
    else:
        console.print("Done.")

    if failed:
        sys.exit(1)


# --------------------------------------------------------------------------
# Pattern Search
# --------------------------------------------------------------------------

@cli.command('pattern')
@click.argument('data_file', type=click.Path(exists=True, dir_okay=False))
@click.argument('pattern')
@click.option('-o', '--offset', default='0', help='Offset added to each match (e.g. -0x10)')
def pattern_cmd(data_file, pattern, offset):
    """Search a file for a hex byte PATTERN ("??" matches any byte)."""
    try:
        match_offset = int(offset, 0)
    except ValueError:
        click.echo(f"Invalid offset: {offset}", err=True)
        sys.exit(1)

    data = Path(data_file).read_bytes()

    try:
        matches = search_pattern(data, pattern, match_offset)
    except PatternError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for match in matches:
        click.echo(f"0x{match:08X}")

    click.echo(f"Found {len(matches)} match(es)")


# --------------------------------------------------------------------------
# Entry Point
# --------------------------------------------------------------------------

def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
