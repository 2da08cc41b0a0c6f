# usage: line-level normalization (gutenberg strip, unicode)
import re
import unicodedata
from typing import List, Sequence

# Tolerate the common START/END phrasings found in Gutenberg dumps
_START_RE = re.compile(
    r"^\*{0,3}\s*START\s+OF\s+(?:THE\s+|THIS\s+)?PROJECT\s+GUTENBERG\s+E-?BOOK",
    re.IGNORECASE,
)
_END_RE = re.compile(
    r"^(?:\*{0,3}\s*END\s+OF\s+(?:THE\s+|THIS\s+)?PROJECT\s+GUTENBERG\s+E-?BOOK"
    r"|End\s+of\s+(?:the\s+)?Project\s+Gutenberg'?s?)",
    re.IGNORECASE,
)


def strip_gutenberg_lines(lines: Sequence[str]) -> List[str]:
    """
    Keep only the body between Project Gutenberg START/END marker lines.

    The START line and everything above it, and the END line and everything
    below it, are removed. Input without markers is returned unchanged (as a
    new list), so plain texts pass through untouched.
    """
    start, end = 0, len(lines)
    for i, ln in enumerate(lines):
        if _START_RE.search(ln.strip()):
            start = i + 1
            break
    for i in range(len(lines) - 1, start - 1, -1):
        if _END_RE.search(lines[i].strip()):
            end = i
            break
    return list(lines[start:end])


def normalize_line(line: str) -> str:
    """NFKC-normalize a line (curly quotes, ligatures, full-width forms) and trim its right edge."""
    return unicodedata.normalize("NFKC", line).rstrip()
