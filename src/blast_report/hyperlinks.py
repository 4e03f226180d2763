"""Hyperlinking of BLAST hit lines."""

import logging
import re
from typing import Callable, Iterable, Optional, Sequence

from .hit_line import NormalizedHitLine
from .models import AllRetrievableIds, CoordinateSpan, HitRecord, HyperlinkRequest

logger = logging.getLogger(__name__)

# Builds the complete replacement for a hit line, or None to fall through
LineStrategy = Callable[[HyperlinkRequest], Optional[str]]
# Builds the URL a hit's id should point at, or None for no link
LinkStrategy = Callable[[HyperlinkRequest], Optional[str]]

RETRIEVAL_PATH = "/get_sequence/"

HIT_HEADER_PATTERN = re.compile(r'^>([ \t]*)(\S+)([^\r\n]*)(.*)$', re.S)


def retrievable_id(sequence_id: str) -> Optional[str]:
    """
    Get the part of a hit id that blastdbcmd can look up.

    'lcl|SI2.2.0_06267' gives 'SI2.2.0_06267'; ids without '|' are used as is.
    """
    if '|' in sequence_id:
        sequence_id = sequence_id.split('|')[1]
    return sequence_id or None


def build_retrieval_link(sequence_ids: Iterable[str], databases: Iterable[str]) -> str:
    """Link to the FASTA of sequence_ids; ids and databases are space separated."""
    return f"{RETRIEVAL_PATH}?id={' '.join(sequence_ids)}&db={' '.join(databases)}"


def standard_sequence_link(request: HyperlinkRequest) -> Optional[str]:
    """
    Link a hit to its FASTA sequence.

    Only databases formatted with -parse_seqids can be queried by id; BLAST
    shows their hits without a space after the '>'.
    """
    if not request.hit_text or request.hit_text[0].isspace():
        return None
    sequence_id = retrievable_id(request.sequence_id)
    if sequence_id is None:
        return None
    return build_retrieval_link([sequence_id], request.databases)


class HyperlinkResolver:
    """Turns hit header lines into hyperlinked ones.

    Strategies are tried in order: line_strategy may replace the whole
    line; otherwise link_strategy, or standard_sequence_link when no
    link_strategy is given, supplies the URL. None means no strategy.
    """

    def __init__(self,
                 line_strategy: Optional[LineStrategy] = None,
                 link_strategy: Optional[LinkStrategy] = None,
                 base_url: str = ""):
        """
        Initialize the resolver.

        Args:
            line_strategy: Optional builder of complete hit lines
            link_strategy: Optional builder of hit URLs, replaces the standard one
            base_url: Prefix for site-relative links
        """
        self.line_strategy = line_strategy
        self.link_strategy = link_strategy or standard_sequence_link
        self.base_url = base_url.rstrip('/')

    def url(self, link: str) -> str:
        """Make a site-relative link absolute to the configured base URL."""
        if link.startswith('/'):
            return f"{self.base_url}{link}"
        return link

    def resolve(self,
                hit: NormalizedHitLine,
                databases: Sequence[str],
                span: Optional[CoordinateSpan] = None,
                retrievable_ids: Optional[AllRetrievableIds] = None) -> HitRecord:
        """
        Resolve the hyperlink of a normalized hit line.

        Args:
            hit: Hit header with its inline anchor removed
            databases: Databases searched in this run
            span: Subject coordinates covered by the hit
            retrievable_ids: Collects the id of every linked hit

        Returns:
            HitRecord whose text is the line to output
        """
        match = HIT_HEADER_PATTERN.match(hit.text)
        if not match:
            return HitRecord(text=self._with_anchor(hit.text, hit.anchor), sequence_id="", span=span)

        leading, sequence_id, rest, line_end = match.groups()
        request = HyperlinkRequest(
            sequence_id=sequence_id,
            databases=tuple(databases),
            span=span,
            hit_text=leading + sequence_id + rest,
        )

        if self.line_strategy is not None:
            logger.debug(f"Using custom hyperlinking line creator with {request}")
            line = self.line_strategy(request)
            if line is not None:
                return HitRecord(text=line, sequence_id=sequence_id, span=span)

        logger.debug(f"Using hyperlink creator with {request}")
        link = self.link_strategy(request)

        if link is None:
            logger.debug(f"No link added for: {sequence_id}")
            return HitRecord(text=self._with_anchor(hit.text, hit.anchor), sequence_id=sequence_id, span=span)

        link = self.url(link)
        logger.debug(f"Added link for: {sequence_id} {link}")
        if retrievable_ids is not None:
            collected = retrievable_id(sequence_id)
            if collected:
                retrievable_ids.add(collected)

        line = f">{leading}<a href='{link}' target='_blank'>{sequence_id}</a>{rest}{hit.anchor}{line_end}"
        return HitRecord(text=line, sequence_id=sequence_id, span=span, link=link)

    @staticmethod
    def _with_anchor(text: str, anchor: str) -> str:
        """Put an inline anchor back at the end of a line."""
        if not anchor:
            return text
        body = text.rstrip('\r\n')
        return f"{body}{anchor}{text[len(body):]}"
