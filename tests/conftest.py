"""Shared fixtures for the BLAST report tests."""

import logging
import logging.handlers

import pytest

from blast_report.logging_config import ColoredFormatter

DATABASE = "Sinvicta2-2-3.cdna.subset.fasta"

# Shaped like `blastn -html` output; line numbers matter to the formatter
SAMPLE_REPORT = [
    '<HTML>\n',                                                                   # 1
    '<TITLE>BLAST Search Results</TITLE>\n',                                      # 2
    '<BODY BGCOLOR="#FFFFFF" LINK="#0000FF" VLINK="#660099" ALINK="#660099">\n',  # 3
    '<PRE>\n',                                                                    # 4
    '<b>BLASTN 2.2.25+</b>\n',                                                    # 5
    '<script src="blastResult.js"></script>\n',                                   # 6
    '<b>Reference:</b> Zheng Zhang, Scott Schwartz, Lukas Wagner, and\n',         # 7
    'Webb Miller (2000), "A greedy algorithm for aligning DNA\n',                 # 8
    'sequences", J Comput Biol 2000; 7(1-2):203-14.\n',                           # 9
    '\n',                                                                         # 10
    '\n',                                                                         # 11
    '\n',                                                                         # 12
    '\n',                                                                         # 13
    '\n',                                                                         # 14
    '\n',                                                                         # 15
    f'<b>Database:</b> {DATABASE}\n',                                             # 16
    '           2,000 sequences; 3,063,066 total letters\n',                      # 17
    '\n',                                                                         # 18
    '<b>Query=</b> query_1\n',                                                    # 19
    'Length=100\n',                                                               # 20
    '>lcl|SI2.2.0_06267<a name="SI2.2.0_06267"></a> locus=Si_gnF.scaffold02592\n',  # 21
    'Length=2000\n',                                                              # 22
    ' Score = 180 bits (90),  Expect = 1e-45\n',                                  # 23
    'Query  1    ACGTACGTAC  50\n',                                               # 24
    'Sbjct  100  ACGTACGTAC  149\n',                                              # 25
    'Query  51   ACGTACGTAC  100\n',                                              # 26
    'Sbjct  150  ACGTACGTAC  199\n',                                              # 27
    '<b>Query=</b> query_2\n',                                                    # 28
    'Length=80\n',                                                                # 29
    '>lcl|SI2.2.0_13722<a name="SI2.2.0_13722"></a> locus=Si_gnF.scaffold06207\n',  # 30
    'Sbjct  500  ACGTACGTAC  460\n',                                              # 31
    'Lambda      K        H\n',                                                   # 32
    f'  Database: {DATABASE}\n',                                                  # 33
    '    Posted date:  May 12, 2011  4:28 PM\n',                                  # 34
    '</PRE>\n',                                                                   # 35
    '</BODY>\n',                                                                  # 36
    '</HTML>\n',                                                                  # 37
]


@pytest.fixture
def report_lines():
    """Lines of a two-query BLAST HTML report."""
    return list(SAMPLE_REPORT)


@pytest.fixture
def databases():
    """Databases the sample report was searched against."""
    return [DATABASE]


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Take the handlers setup_logging added off the root logger."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, logging.handlers.RotatingFileHandler) or isinstance(handler.formatter, ColoredFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
