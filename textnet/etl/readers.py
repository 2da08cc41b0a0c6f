# usage: strict UTF-8 text loading for the segmentation stage
from pathlib import Path
from typing import List

from textnet.shared.errors import MalformedInputError


def read_lines(path) -> List[str]:
    """
    Read a text file as a list of lines without line terminators.

    Decoding is strict UTF-8 (a leading BOM is accepted). There is no
    encoding guesswork: an undecodable file raises MalformedInputError
    rather than being salvaged, because silently mangled characters would
    shift token counts downstream.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"{p.name} is not valid UTF-8 text") from exc
    return text.splitlines()


def iter_text_files(path) -> List[Path]:
    """Expand a .txt file or a directory (recursively) into a sorted list of .txt files."""
    p = Path(path)
    if p.is_file():
        if p.suffix.lower() != ".txt":
            raise MalformedInputError(f"TXT-only input. Offending file: {p.name}")
        return [p]
    if p.is_dir():
        paths = sorted(p.rglob("*.txt"))
        if paths:
            return paths
    raise MalformedInputError(f"No .txt files found at {p}")
