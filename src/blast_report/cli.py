"""Command-line interface for the BLAST report tool."""

import sys
from pathlib import Path

import click

from . import __version__
from .cli_utils import error, read_text, set_quiet_mode, status, write_output
from .config import Config, create_example_config, get_default_config_path
from .error_handler import ErrorHandler, ReportInputError
from .hyperlinks import HyperlinkResolver
from .logging_config import LogTimer, setup_logging
from .query_input import to_fasta
from .report_formatter import ReportFormatter
from .retrieval import FastaFileFetcher, get_sequences


@click.group(invoke_without_command=True)
@click.option('--config', type=click.Path(exists=True), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress all output except errors and results')
@click.option('--log-file', help='Also write logs to this file in the log directory')
@click.option('--generate-config', is_flag=True, help='Generate example configuration file')
@click.version_option(__version__)
@click.pass_context
def cli(ctx, config, verbose, quiet, log_file, generate_config):
    """BLAST report tool.

    Turns BLAST HTML reports into hyperlinked result pages and retrieves
    hit sequences.

    Examples:
        blast-report render report.html results.html --db Sinvicta2-2-3.prot.subset
        blast-report get-sequence --id "SI2.2.0_06267 SI2.2.0_13722" --db Sinvicta2-2-3.prot.subset
    """
    if quiet and verbose:
        error("Cannot use both --quiet and --verbose")
        sys.exit(1)

    set_quiet_mode(quiet)

    if generate_config:
        config_path = create_example_config()
        status(f"Generated example configuration file: {config_path}")
        sys.exit(0)

    config_path = Path(config) if config else get_default_config_path()
    cfg = Config.from_file(config_path)
    cfg.merge_env_vars()
    cfg.merge_cli_args(verbose=verbose, log_file=log_file)

    setup_logging(
        log_level=cfg.logging.level,
        log_file=log_file,
        log_dir=cfg.logging.log_dir,
        colors=cfg.logging.colors,
        quiet=quiet,
        to_file=cfg.logging.log_to_file
    )

    ctx.obj = {'config': cfg, 'errors': ErrorHandler()}

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument('report_file')
@click.argument('output_file', type=click.Path(), required=False)
@click.option('--db', 'databases', multiple=True, help='Database searched (repeatable)')
@click.option('--base-url', help='Prefix for sequence retrieval links')
@click.pass_obj
def render(obj, report_file, output_file, databases, base_url):
    """Render a BLAST HTML report as a hyperlinked results fragment.

    REPORT_FILE is the output of a BLAST run made with -html ('-' for stdin).
    """
    cfg, errors = obj['config'], obj['errors']
    cfg.merge_cli_args(base_url=base_url, databases=databases)

    try:
        lines = read_text(report_file).splitlines(keepends=True)
    except ReportInputError as e:
        context = errors.handle_error(e, "render", item_id=report_file)
        error(f"Failed to read report: {e}")
        status(context.suggestion)
        sys.exit(1)

    status(f"Read {len(lines)} lines from {report_file}")

    formatter = ReportFormatter(HyperlinkResolver(base_url=cfg.report.base_url))
    with LogTimer(f"Rendering {report_file}"):
        fragment = formatter.format(lines, cfg.search.databases)

    write_output(fragment, output_file)


@cli.command('normalize-query')
@click.argument('input_file')
@click.argument('output_file', type=click.Path(), required=False)
@click.option('--label', help='Header to add when the input has none')
@click.pass_obj
def normalize_query(obj, input_file, output_file, label):
    """Give every sequence in INPUT_FILE a unique FASTA identifier."""
    try:
        sequence = read_text(input_file)
    except ReportInputError as e:
        context = obj['errors'].handle_error(e, "normalize-query", item_id=input_file)
        error(f"Failed to read query: {e}")
        status(context.suggestion)
        sys.exit(1)

    label_factory = (lambda: label) if label else None
    write_output(to_fasta(sequence, label_factory), output_file)


@cli.command('get-sequence')
@click.option('--id', 'id_text', required=True, help='Space separated sequence ids')
@click.option('--db', 'db_text', required=True, help='Space separated database names')
@click.option('--database-dir', type=click.Path(file_okay=False), help='Directory holding the databases as FASTA')
@click.argument('output_file', type=click.Path(), required=False)
@click.pass_obj
def get_sequence(obj, id_text, db_text, database_dir, output_file):
    """Retrieve hit sequences from FASTA databases."""
    cfg = obj['config']
    cfg.merge_cli_args(database_dir=database_dir)

    fetcher = FastaFileFetcher(cfg.retrieval.database_dir)
    try:
        page = get_sequences(id_text, db_text, fetcher)
    except (OSError, ValueError) as e:
        context = obj['errors'].handle_error(e, "get-sequence", item_id=db_text)
        error(f"Failed to retrieve sequences: {e}")
        status(context.suggestion)
        sys.exit(1)

    write_output(page, output_file)


if __name__ == '__main__':
    cli()
