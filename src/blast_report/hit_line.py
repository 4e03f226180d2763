"""Normalization of hit header lines carrying inline anchors.

BLAST marks each hit header with a named anchor so the summary table can
link to it. Where that anchor sits depends on how the database was built:

    >lcl|SI2.2.0_06267<a name="SI2.2.0_06267"></a> locus=...   (-parse_seqids)
    ><a name="12345"></a>SI2.2.0_06267 locus=...              (no -parse_seqids)

Both are rewritten to '>ID rest' with the anchor kept aside, so the line can
be re-linked and the anchor put back at the end.
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern


@dataclass(frozen=True)
class AnchorRule:
    """A known anchor placement and how to take it out of a header line."""

    name: str
    pattern: Pattern
    replacement: str
    anchor_group: int


TRAILING_ANCHOR = AnchorRule(
    name="trailing_anchor",
    pattern=re.compile(r'^>(.+)(<a.*></a>)(.*)'),
    replacement=r'>\1\3',
    anchor_group=2,
)

LEADING_ANCHOR = AnchorRule(
    name="leading_anchor",
    pattern=re.compile(r'^>(<a.*></a>)(.*)'),
    replacement=r'>\2',
    anchor_group=1,
)

ANCHOR_RULES = (TRAILING_ANCHOR, LEADING_ANCHOR)


@dataclass(frozen=True)
class NormalizedHitLine:
    """A hit header with its inline anchor removed."""

    text: str
    anchor: str = ""
    rule: Optional[str] = None


def apply_rule(rule: AnchorRule, line: str) -> Optional[NormalizedHitLine]:
    """Strip the anchor from line if it has the shape rule describes."""
    match = rule.pattern.match(line)
    if not match:
        return None
    text = rule.pattern.sub(rule.replacement, line, count=1)
    return NormalizedHitLine(text=text, anchor=match.group(rule.anchor_group), rule=rule.name)


def normalize_hit_line(line: str) -> NormalizedHitLine:
    """
    Remove a known inline anchor from a hit header line.

    Args:
        line: Raw hit header line, starting with '>'

    Returns:
        The '>ID rest' line and the anchor taken out of it. Lines in
        neither known shape are returned unchanged with an empty anchor.
    """
    for rule in ANCHOR_RULES:
        normalized = apply_rule(rule, line)
        if normalized is not None:
            return normalized
    return NormalizedHitLine(text=line)
