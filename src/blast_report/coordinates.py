"""Subject coordinate extraction for BLAST hits."""

import logging
import re
from typing import List, Optional, Sequence

from .models import CoordinateSpan

logger = logging.getLogger(__name__)

# Next local sequence hit or the statistics footer ends a hit's alignments
HIT_BOUNDARY_PATTERN = re.compile(r'>lcl|Lambda')
SUBJECT_ROW_PATTERN = re.compile(r'Sbjct')


def find_hit_boundary(lines: Sequence[str], header_number: int) -> Optional[int]:
    """
    Find where the alignments of a hit end.

    Args:
        lines: All report lines
        header_number: 1-based line number of the hit header

    Returns:
        0-based index of the boundary line, or None if there is none
    """
    for index in range(header_number, len(lines)):
        if HIT_BOUNDARY_PATTERN.search(lines[index]):
            return index
    return None


def subject_rows(lines: Sequence[str], header_number: int) -> List[str]:
    """Collect the Sbjct rows between a hit header and its boundary."""
    boundary = find_hit_boundary(lines, header_number)
    if boundary is None:
        logger.debug(f"No hit boundary after line {header_number}, scanning to end of report")
        boundary = len(lines)

    return [line for line in lines[header_number:boundary] if SUBJECT_ROW_PATTERN.search(line)]


def parse_subject_row(row: str) -> Optional[List[int]]:
    """
    Read the start and end coordinates of a Sbjct row.

    'Sbjct: 120  ACGTACGT  127' gives [120, 127].
    """
    fields = row.split()
    if len(fields) < 2:
        return None
    try:
        return [int(fields[1]), int(fields[-1])]
    except ValueError:
        logger.debug(f"Skipping unparseable Sbjct row: {row.rstrip()}")
        return None


def scan_hit_coordinates(lines: Sequence[str], header_number: int) -> Optional[CoordinateSpan]:
    """
    Get the subject coordinate span of the hit whose header is at header_number.

    Returns:
        Span covering every Sbjct row of the hit, or None if it has none
    """
    positions = []
    for row in subject_rows(lines, header_number):
        coordinates = parse_subject_row(row)
        if coordinates:
            positions.extend(coordinates)

    if not positions:
        return None
    return CoordinateSpan(min(positions), max(positions))
