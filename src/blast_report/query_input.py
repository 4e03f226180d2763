"""Normalization of user submitted query sequences."""

import logging
import re
from datetime import datetime
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

HEADER_ID_PATTERN = re.compile(r'^>(\S+)', re.M)


def submission_label(now: Optional[datetime] = None) -> str:
    """Label for a query submitted without a FASTA header."""
    now = now or datetime.now()
    return f"Submitted at {now.strftime('%H:%M, %A, %B %d, %Y')}"


def to_fasta(sequence: str, label_factory: Optional[Callable[[], str]] = None) -> str:
    """
    Ensure every submitted sequence has a unique identifier.

    A header is added if the input has none, and repeated identifiers get a
    '_1', '_2', ... suffix from their second occurrence on.

    Args:
        sequence: Raw text submitted by the user
        label_factory: Builds the label of a missing header

    Returns:
        FASTA text

    Example:
        >>> to_fasta("acgt", lambda: "query")
        '>query\\nacgt'
    """
    sequence = sequence.lstrip()
    if not sequence.startswith('>'):
        label = label_factory() if label_factory else submission_label()
        logger.debug(f"Adding header to submitted sequence: {label}")
        sequence = f">{label}\n{sequence}"

    seen: Dict[str, int] = {}

    def unique_header(match) -> str:
        header = match.group(0)
        if header in seen:
            seen[header] += 1
            return f"{header}_{seen[header] - 1}"
        seen[header] = 1
        return header

    return HEADER_ID_PATTERN.sub(unique_header, sequence)
