"""Running a BLAST search through an injected aligner and rendering its report."""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .config import Config
from .error_handler import InvalidSearchError, UpstreamRunError
from .hyperlinks import HyperlinkResolver, LineStrategy, LinkStrategy
from .query_input import to_fasta
from .report_formatter import ReportFormatter

logger = logging.getLogger(__name__)

BLAST_METHODS = ['blastn', 'blastp', 'blastx', 'tblastn', 'tblastx']

# Options the report rewriter depends on
DISALLOWED_OPTIONS = ['-out', '-html', '-outfmt', '-db', '-query']
ADVANCED_OPTIONS_PATTERN = re.compile(r"[a-z0-9\-_\. ']*", re.I)


@dataclass
class AlignmentRun:
    """Outcome of running the aligner."""
    lines: List[str] = field(default_factory=list)
    success: bool = True
    status: int = 200
    message: str = ""
    command: str = ""


# (method, query FASTA, space separated database paths, options) -> AlignmentRun
AlignmentRunner = Callable[[str, Optional[str], str, str], AlignmentRun]


def validate_advanced_parameters(advanced: str) -> None:
    """
    Check the user's advanced options before they reach the aligner.

    Raises:
        InvalidSearchError: On characters outside letters, digits, spaces
            and -_.' or on an option the report rendering relies on
    """
    if not advanced:
        return
    if not ADVANCED_OPTIONS_PATTERN.fullmatch(advanced):
        raise InvalidSearchError("Invalid characters detected in the advanced options")
    for option in DISALLOWED_OPTIONS:
        if option in advanced.lower():
            raise InvalidSearchError(
                f"The advanced BLAST option \"{option}\" is used internally and so cannot be specified by you"
            )


def build_blast_options(method: str, advanced: str = "", num_threads: int = 1) -> str:
    """
    Complete the user's advanced options for a run.

    blastn means blastn, not megablast, unless the user picked a task.
    """
    options = advanced or ""
    if method == 'blastn' and 'task' not in options:
        options += ' -task blastn '
    options += f" -num_threads {num_threads}"
    return options


def run_search(method: str,
               sequence: str,
               databases: Sequence[str],
               runner: AlignmentRunner,
               advanced: str = "",
               num_threads: int = 1,
               resolver: Optional[HyperlinkResolver] = None) -> str:
    """
    Run a BLAST search and render its report.

    Args:
        method: BLAST program, one of BLAST_METHODS
        sequence: Query text as submitted
        databases: Paths of the databases to search
        runner: Collaborator running the aligner
        advanced: Extra BLAST options given by the user
        num_threads: Threads the aligner may use
        resolver: Hyperlink resolver for hit lines

    Returns:
        HTML fragment of the results

    Raises:
        InvalidSearchError: If the method or advanced options are rejected
        UpstreamRunError: If the aligner reports a failed run
    """
    if method not in BLAST_METHODS:
        raise InvalidSearchError(f"Unknown BLAST method: {method}.")
    validate_advanced_parameters(advanced)

    query = to_fasta(sequence) if sequence else None
    options = build_blast_options(method, advanced, num_threads)

    run = runner(method, query, ' '.join(databases), options)
    logger.info(f"Ran: {run.command or method}")

    if not run.success:
        raise UpstreamRunError(run.status, run.message)

    return ReportFormatter(resolver).format(run.lines, databases)


def run_configured_search(config: Config,
                          method: str,
                          sequence: str,
                          runner: AlignmentRunner,
                          advanced: str = "",
                          databases: Optional[Sequence[str]] = None,
                          line_strategy: Optional[LineStrategy] = None,
                          link_strategy: Optional[LinkStrategy] = None) -> str:
    """
    Run a BLAST search with the databases, thread count and base URL of a config.

    databases, when given, takes the place of the configured ones.
    """
    if databases is None:
        databases = config.search.databases
    if not databases:
        raise InvalidSearchError("No BLAST database provided.")

    resolver = HyperlinkResolver(
        line_strategy=line_strategy,
        link_strategy=link_strategy,
        base_url=config.report.base_url,
    )
    return run_search(
        method, sequence, databases, runner,
        advanced=advanced,
        num_threads=config.search.num_threads,
        resolver=resolver,
    )
