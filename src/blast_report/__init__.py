"""BLAST report rendering tool.

Turns the HTML report of a BLAST run into a browsable, hyperlinked,
per-query-segmented fragment and reconciles batch sequence retrieval
requests against what was actually found.
"""

__version__ = "1.0.0"
