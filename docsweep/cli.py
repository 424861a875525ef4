# === FILE: docsweep/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for DocSweep.

Commands:
  sweep     Crawl a content tree, report blank pages, republish the rest
  classify  Classify a local HTML file as blank or substantive
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

sweep options:
  ROOT                Folder to crawl (overrides root_path)
  --concurrency N     Max concurrent folder listings
  --dry-run           Classify only, do not republish
  --json PATH         Save the JSON report to a file
  --html PATH         Save the HTML report to a file
  --template DIR      Directory holding report.html.j2
  --pretty            Indent JSON printed to stdout
  --timeout SEC       Timeout for the whole sweep (seconds)

Example:
  docsweep sweep /org/site --dry-run --json reports/sweep.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from docsweep import __version__
from docsweep.classifier import inspect
from docsweep.config import DEFAULT_CFG, SweepConfig, read_config_file
from docsweep.engine import start_sweep
from docsweep.logger import DEFAULT_FORMAT, init_logging
from docsweep.parser.content_view import SoupContentView
from docsweep.report.html_report import render_html
from docsweep.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def build_config(ctx: click.Context, **overrides) -> SweepConfig:
    """Merge the loaded config file with command line overrides."""
    data = dict(ctx.obj['config_data'])
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return SweepConfig(**data)
    except ValidationError as e:
        print_error(f'Invalid configuration: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='DocSweep, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML/JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """DocSweep: find blank pages in a content tree and republish the rest."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    data = {}
    if config_path is not None or DEFAULT_CFG.exists():
        try:
            data = read_config_file(config_path)
        except Exception as e:
            print_error(f'Failed to load configuration: {e}')
    ctx.obj['config_data'] = data


@cli.command('sweep', context_settings=CONTEXT_SETTINGS)
@click.argument('root', required=False)
@click.option(
    '--concurrency', '-n', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Max concurrent folder listings (default 50)'
)
@click.option(
    '--dry-run/--publish', 'dry_run',
    default=None,
    help='Only classify pages, never republish them'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with report.html.j2 (bundled template by default)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON printed to stdout'
)
@click.option(
    '--timeout', 'sweep_timeout',
    type=float,
    default=None,
    help='Timeout for the whole sweep (seconds)'
)
@click.pass_context
def sweep(ctx, root, concurrency, dry_run, json_output, html_output, template_dir, pretty, sweep_timeout):
    """Crawl ROOT, report blank pages and republish substantive ones."""
    cfg = build_config(ctx, root_path=root, concurrency=concurrency, dry_run=dry_run)
    try:
        if sweep_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_sweep(cfg), timeout=sweep_timeout)
            )
        else:
            report = asyncio.run(start_sweep(cfg))
    except asyncio.TimeoutError:
        print_error(f'Sweep did not finish within {sweep_timeout} seconds')
    except Exception as e:
        print_error(f'Sweep failed: {e}')

    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML report: {e}')


@cli.command('classify', context_settings=CONTEXT_SETTINGS)
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def classify_file(file):
    """Classify a local HTML FILE without touching the content API."""
    result = inspect(SoupContentView.from_markup(file.read_text(encoding='utf-8')))
    click.echo(f'{file}: {result.verdict.value}')
    click.echo(f'  text: "{result.text}"')
    click.echo(f'  html length: {result.markup_length}')
    click.echo(f'  body children: {result.child_count}')
    click.echo(f'  raw text length: {result.raw_text_length}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON (token masked)."""
    cfg = build_config(ctx)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
