"""
Package export surface for the ETL stage.
Exposes readers, line normalizers and the part/chapter segmenter.
"""
from .readers import read_lines, iter_text_files    # strict UTF-8 loaders
from .normalizers import (                          # line-level cleanup
    strip_gutenberg_lines,
    normalize_line,
)
from .segmenter import (                            # structural labelling
    TextRecord,
    SentenceRecord,
    is_part_marker,
    is_chapter_marker,
    segment_lines,
    split_sentences,
)

__all__ = [
    "read_lines",
    "iter_text_files",
    "strip_gutenberg_lines",
    "normalize_line",
    "TextRecord",
    "SentenceRecord",
    "is_part_marker",
    "is_chapter_marker",
    "segment_lines",
    "split_sentences",
]

__version__ = "0.1.0"
