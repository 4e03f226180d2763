"""Data models for the BLAST report tool."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple


class ReportSection(Enum):
    """Section of the BLAST report a line belongs to."""

    BANNER = "banner"
    REFERENCE = "reference"
    DATABASE_SUMMARY = "database_summary"
    BODY = "body"


@dataclass(frozen=True)
class ReportLine:
    """A single report line with its 1-based position."""

    number: int
    text: str


@dataclass
class QueryBlock:
    """Portion of the report belonging to one submitted sequence."""

    index: int
    label: str


@dataclass(frozen=True)
class CoordinateSpan:
    """Lowest and highest subject position covered by a hit."""

    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Invalid span: {self.start} > {self.end}")

    def as_tuple(self) -> Tuple[int, int]:
        return (self.start, self.end)


@dataclass
class HitRecord:
    """A hit header line and what was derived from it."""

    text: str
    sequence_id: str
    span: Optional[CoordinateSpan] = None
    link: Optional[str] = None


@dataclass(frozen=True)
class HyperlinkRequest:
    """Everything a hyperlink strategy gets to see about a hit."""

    sequence_id: str
    databases: Tuple[str, ...]
    span: Optional[CoordinateSpan] = None
    hit_text: str = ""  # everything after '>' on the header line


@dataclass
class RetrievalRequest:
    """Sequence ids to look up in one or more databases."""

    sequence_ids: List[str]
    databases: List[str]

    def __post_init__(self):
        # A multi-query search may have found the same hit several times
        self.sequence_ids = list(dict.fromkeys(self.sequence_ids))
        self.databases = list(self.databases)

    @classmethod
    def from_params(cls, id_text: str, db_text: str) -> 'RetrievalRequest':
        """Build a request from whitespace separated id and database strings."""
        return cls(sequence_ids=id_text.split(), databases=db_text.split())

    @property
    def requested_count(self) -> int:
        return len(self.sequence_ids)


@dataclass
class RetrievalResult:
    """Sequences found for a retrieval request."""

    request: RetrievalRequest
    sequences: str = ""
    found_count: int = 0

    @property
    def requested_count(self) -> int:
        return self.request.requested_count

    @property
    def is_complete(self) -> bool:
        return self.found_count == self.requested_count

    @property
    def discrepancy(self) -> Optional[str]:
        """'more' or 'less' when the counts disagree, otherwise None."""
        if self.is_complete:
            return None
        return "more" if self.found_count > self.requested_count else "less"


@dataclass
class AllRetrievableIds:
    """Ids of every linked hit, in order of first appearance."""

    ids: List[str] = field(default_factory=list)

    def add(self, sequence_id: str) -> None:
        if sequence_id not in self.ids:
            self.ids.append(sequence_id)

    def extend(self, sequence_ids: Iterable[str]) -> None:
        for sequence_id in sequence_ids:
            self.add(sequence_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def __len__(self) -> int:
        return len(self.ids)

    def __bool__(self) -> bool:
        return bool(self.ids)
