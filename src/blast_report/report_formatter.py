"""Rewriting of BLAST HTML reports into result page fragments."""

import html
import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .coordinates import scan_hit_coordinates
from .hit_line import normalize_hit_line
from .hyperlinks import HyperlinkResolver, build_retrieval_link
from .models import AllRetrievableIds, QueryBlock, ReportLine, ReportSection

logger = logging.getLogger(__name__)

BANNER_END = 5
REFERENCE_START = 7
REFERENCE_END = 15

SUMMARY_END_PATTERN = re.compile(r'total letters')
SKIPPED_LINE_PATTERNS = [
    re.compile(r'^</BODY>'),
    re.compile(r'^</HTML>'),
    re.compile(r'^</PRE>'),
]
SCRIPT_INCLUSION_PATTERN = re.compile(r'<script[^>]*>\s*</script>')
QUERY_PATTERN = re.compile(r'^<b>Query=</b> (.*?)\r?$')
DATABASE_PATTERN = re.compile(r'^  Database: ')


@dataclass
class _RewriteState:
    """Working buffers of a single report rewrite."""

    lines: Sequence[str]
    databases: Sequence[str]
    section: ReportSection = ReportSection.BANNER
    output: List[str] = field(default_factory=list)
    reference: List[str] = field(default_factory=list)
    database_summary: List[str] = field(default_factory=list)
    query: Optional[QueryBlock] = None
    query_count: int = 0
    summary_injected: bool = False
    retrievable_ids: AllRetrievableIds = field(default_factory=AllRetrievableIds)


class ReportFormatter:
    """Formats BLAST HTML output for display in the results page."""

    def __init__(self, resolver: Optional[HyperlinkResolver] = None):
        """
        Initialize the formatter.

        Args:
            resolver: Hyperlink resolver for hit lines, standard links if None
        """
        self.resolver = resolver or HyperlinkResolver()
        self._handlers = {
            ReportSection.BANNER: self._banner_line,
            ReportSection.REFERENCE: self._reference_line,
            ReportSection.DATABASE_SUMMARY: self._summary_line,
            ReportSection.BODY: self._body_line,
        }

    def format(self, lines: Iterable[str], databases: Sequence[str]) -> str:
        """
        Rewrite a BLAST report into an HTML fragment.

        Args:
            lines: Report lines, each with its line terminator
            databases: Names of the databases searched

        Returns:
            Results heading, retrieval link, rewritten body and reference
        """
        state = _RewriteState(lines=list(lines), databases=list(databases))

        for number, text in enumerate(state.lines, start=1):
            line = ReportLine(number, text)
            self._handlers[state.section](state, line)

        if state.query is not None:
            state.output.append("</pre></div>\n")
        state.output.append("</pre>")

        logger.debug(
            f"Formatted report: {len(state.lines)} lines, {state.query_count} queries, "
            f"{len(state.retrievable_ids)} retrievable hits"
        )

        reference = ''.join(state.reference).strip()
        return (
            "<h2>Results</h2>"
            + self._retrieval_text(state)
            + "<br/><br/>"
            + ''.join(state.output)
            + "<br/>"
            + f"<pre>{reference}</pre>"
        )

    def _retrieval_text(self, state: _RewriteState) -> str:
        """Link to the FASTA of every retrievable hit, if there are any."""
        if not state.retrievable_ids:
            return ''
        link = self.resolver.url(build_retrieval_link(state.retrievable_ids, state.databases))
        return f"<a href='{link}'>FASTA of {len(state.retrievable_ids)} retrievable hit(s)</a>"

    def _banner_line(self, state: _RewriteState, line: ReportLine) -> None:
        if line.number <= BANNER_END:
            return
        # The line between banner and reference still goes through the body rules
        state.section = ReportSection.REFERENCE
        self._body_line(state, line)

    def _reference_line(self, state: _RewriteState, line: ReportLine) -> None:
        if line.number <= REFERENCE_END:
            state.reference.append(line.text)
            return
        state.section = ReportSection.DATABASE_SUMMARY
        self._summary_line(state, line)

    def _summary_line(self, state: _RewriteState, line: ReportLine) -> None:
        state.database_summary.append(line.text)
        if SUMMARY_END_PATTERN.search(line.text):
            state.section = ReportSection.BODY

    def _body_line(self, state: _RewriteState, line: ReportLine) -> None:
        text = line.text
        if any(pattern.match(text) for pattern in SKIPPED_LINE_PATTERNS):
            return

        text = SCRIPT_INCLUSION_PATTERN.sub('', text)

        if text.startswith('>'):
            state.output.append(self._hit_line(state, line.number, text))
            return

        match = QUERY_PATTERN.match(text)
        if match:
            state.output.append(self._open_query(state, match.group(1)))
        elif DATABASE_PATTERN.match(text) and not state.summary_injected:
            state.output.append(self._inject_summary(state))
            state.output.append(text)
        else:
            state.output.append(text)

    def _hit_line(self, state: _RewriteState, number: int, text: str) -> str:
        hit = normalize_hit_line(text)
        span = scan_hit_coordinates(state.lines, number)
        record = self.resolver.resolve(hit, state.databases, span, state.retrievable_ids)
        return record.text

    def _open_query(self, state: _RewriteState, label: str) -> str:
        """Start the wrapper of a new query, closing the previous one."""
        opener = ''
        if state.query is not None:
            opener = "</pre></div>\n"
        state.query_count += 1
        state.query = QueryBlock(index=state.query_count, label=label)
        escaped = html.escape(label, quote=True)
        return (
            f"{opener}<div class=\"resultn\" id=\"{escaped}\">\n"
            f"<h3>Query= {escaped}</h3><pre>"
        )

    def _inject_summary(self, state: _RewriteState) -> str:
        """Close the last query and show the database summary."""
        closer = ''
        if state.query is not None:
            closer = "</pre></div>\n"
            state.query = None
        state.summary_injected = True
        return f"{closer}<pre>{''.join(state.database_summary)}\n\n"


def format_blast_results(lines: Iterable[str],
                         databases: Sequence[str],
                         resolver: Optional[HyperlinkResolver] = None) -> str:
    """Rewrite a BLAST report with a standard or given hyperlink resolver."""
    return ReportFormatter(resolver).format(lines, databases)
