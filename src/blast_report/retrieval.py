"""Retrieval of hit sequences from BLAST databases."""

import io
import logging
import re
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Union

from Bio import SeqIO
from Bio.SeqRecord import SeqRecord

from .models import RetrievalRequest, RetrievalResult

logger = logging.getLogger(__name__)

# Fetches the FASTA of the given ids from a single database, '' if none found
SequenceFetcher = Callable[[Sequence[str], str], str]

FASTA_HEADER_PATTERN = re.compile(r'^>', re.M)


def count_fasta_records(text: str) -> int:
    """Count the FASTA headers in text."""
    return len(FASTA_HEADER_PATTERN.findall(text))


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class RetrievalReconciler:
    """Looks up sequences in every database a search used."""

    def __init__(self, fetcher: SequenceFetcher):
        """
        Initialize the reconciler.

        Args:
            fetcher: Collaborator reading sequences from one database
        """
        self.fetcher = fetcher

    def retrieve(self, request: RetrievalRequest) -> RetrievalResult:
        """
        Fetch the requested sequences.

        BLAST results do not say which database a hit came from, so every
        database is asked for every id and the results are concatenated.
        """
        ids = ', '.join(request.sequence_ids)
        logger.info(f"Looking for: '{ids}' in '{', '.join(request.databases)}'")

        found: List[str] = []
        for database in request.databases:
            sequences = self.fetcher(request.sequence_ids, database)
            if sequences:
                found.append(sequences)
            else:
                logger.debug(f"'{ids}' not found in {database}")

        sequences = ''.join(found)
        result = RetrievalResult(
            request=request,
            sequences=sequences,
            found_count=count_fasta_records(sequences),
        )

        if not result.is_complete:
            logger.warning(
                f"Found {result.found_count} sequences for {result.requested_count} "
                f"requested ids ({ids}) in {', '.join(request.databases)}"
            )
        return result


def render_retrieval(result: RetrievalResult) -> str:
    """
    Render retrieved sequences as HTML.

    A diagnostic precedes the sequences when more or fewer were found than
    were asked for.
    """
    out = []
    if not result.is_complete:
        request = result.request
        out.append(
            "<h1>ERROR: incorrect number of sequences found.</h1>\n"
            "<p>Dear user,</p>\n"
            "\n"
            "<p><strong>We have found\n"
            f"<em>{result.discrepancy}</em>\n"
            "sequence than expected.</strong></p>\n"
            "\n"
            "<p>This is likely due to a problem with how databases are formatted.\n"
            "<strong>Please share this text with the person managing this website so\n"
            "they can resolve the issue.</strong></p>\n"
            "\n"
            f"<p> You requested {_plural(result.requested_count, 'sequence')}\n"
            f"with the following identifiers: <code>{', '.join(request.sequence_ids)}</code>,\n"
            f"from the following databases: <code>{', '.join(request.databases)}</code>.\n"
            f"But we found {_plural(result.found_count, 'sequence')}.\n"
            "</p>\n"
            "\n"
            "<p>If sequences were retrieved, you can find them below "
            "(but some may be incorrect, so be careful!).</p>\n"
            "<hr/>\n"
        )
    out.append(f"<pre><code>{result.sequences}</code></pre>")
    return ''.join(out)


def get_sequences(id_text: str, db_text: str, fetcher: SequenceFetcher) -> str:
    """
    Retrieve and render sequences for whitespace separated ids and databases.

    Args:
        id_text: Sequence ids, e.g. 'SI2.2.0_06267 SI2.2.0_13722'
        db_text: Database names, e.g. 'Sinvicta2-2-3.cdna.subset.fasta'
        fetcher: Collaborator reading sequences from one database
    """
    request = RetrievalRequest.from_params(id_text, db_text)
    return render_retrieval(RetrievalReconciler(fetcher).retrieve(request))


class FastaFileFetcher:
    """Fetches sequences from FASTA files named after their database."""

    def __init__(self, database_dir: Union[str, Path] = "."):
        self.database_dir = Path(database_dir)

    def _database_path(self, database: str) -> Path:
        path = Path(database)
        if not path.is_absolute():
            path = self.database_dir / path
        return path

    @staticmethod
    def _record_keys(record_id: str) -> List[str]:
        """Ids a record can be requested by: 'lcl|x' answers to 'lcl|x' and 'x'."""
        keys = [record_id]
        keys.extend(part for part in record_id.split('|') if part and part != record_id)
        return keys

    def __call__(self, sequence_ids: Sequence[str], database: str) -> str:
        path = self._database_path(database)
        if not path.exists():
            logger.debug(f"Database file not found: {path}")
            return ''

        wanted = set(sequence_ids)
        matches: Dict[str, SeqRecord] = {}
        for record in SeqIO.parse(str(path), "fasta"):
            for key in self._record_keys(record.id):
                if key in wanted and key not in matches:
                    matches[key] = record

        records = [matches[sequence_id] for sequence_id in sequence_ids if sequence_id in matches]
        if not records:
            return ''

        handle = io.StringIO()
        SeqIO.write(records, handle, "fasta")
        return handle.getvalue()
