# usage: split raw novel lines into (index, part, chapter, text) records
import logging
import re
from dataclasses import dataclass
from itertools import groupby
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from textnet.shared.errors import MalformedInputError

logger = logging.getLogger(__name__)

# Numerals accepted after PART / CHAPTER: Arabic, well-formed Roman, or
# spelled-out English ("PART ONE", "CHAPTER TWENTY-THREE").
_UNITS = "ONE|TWO|THREE|FOUR|FIVE|SIX|SEVEN|EIGHT|NINE"
_TEENS = "TEN|ELEVEN|TWELVE|THIRTEEN|FOURTEEN|FIFTEEN|SIXTEEN|SEVENTEEN|EIGHTEEN|NINETEEN"
_TENS = "TWENTY|THIRTY|FORTY|FIFTY|SIXTY|SEVENTY|EIGHTY|NINETY"
_ROMAN = r"(?=[MDCLXVI])M{0,4}(?:CM|CD|D?C{0,3})(?:XC|XL|L?X{0,3})(?:IX|IV|V?I{0,3})"
_NUMERAL = rf"(?:\d+|{_ROMAN}|(?:{_TENS})(?:[-\s](?:{_UNITS}))?|{_TEENS}|{_UNITS})"

_PART_RE = re.compile(rf"^\s*PART\s+{_NUMERAL}\b", re.IGNORECASE)
_CHAPTER_RE = re.compile(rf"^\s*CHAPTER\s+{_NUMERAL}\b", re.IGNORECASE)


@dataclass(frozen=True)
class TextRecord:
    index: int
    part: int
    chapter: int
    text: str


@dataclass(frozen=True)
class SentenceRecord:
    part: int
    chapter: int
    sentence: int
    text: str

    @property
    def key(self) -> Tuple[int, int, int]:
        return (self.part, self.chapter, self.sentence)


def is_part_marker(line: str) -> bool:
    return bool(_PART_RE.match(line))


def is_chapter_marker(line: str) -> bool:
    return bool(_CHAPTER_RE.match(line))


def _as_text(line: Union[str, bytes], lineno: int) -> str:
    if isinstance(line, str):
        return line
    if isinstance(line, (bytes, bytearray)):
        try:
            return bytes(line).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedInputError(f"line {lineno} is not valid UTF-8") from exc
    raise MalformedInputError(f"line {lineno} is {type(line).__name__}, expected text")


def segment_lines(lines: Iterable[Union[str, bytes]]) -> List[TextRecord]:
    """
    Label each retained line with the part and chapter it belongs to.

    Steps:
    - Walk lines in order keeping two counters, `part` and `chapter` (both 0).
    - A part marker bumps `part` and resets `chapter`; a chapter marker bumps
      `chapter`. Marker lines themselves are dropped.
    - Blank / whitespace-only lines are dropped.
    - Every other line becomes a TextRecord with the current counters and a
      dense 0-based `index` counted over retained lines only.

    Lines before the first marker (or every line, if no marker exists) get
    part=0, chapter=0. Bytes are decoded as UTF-8; anything undecodable or
    non-textual raises MalformedInputError.
    """
    records: List[TextRecord] = []
    part = chapter = 0
    for lineno, raw in enumerate(lines):
        text = _as_text(raw, lineno).rstrip("\r\n")
        if is_part_marker(text):
            part += 1
            chapter = 0
            continue
        if is_chapter_marker(text):
            chapter += 1
            continue
        if not text.strip():
            continue
        records.append(TextRecord(index=len(records), part=part, chapter=chapter, text=text))

    logger.debug("segmented %d records across %d part(s)", len(records), part)
    return records


def _punkt_splitter() -> Callable[[str], List[str]]:
    # Untrained Punkt needs no downloaded model data.
    from nltk.tokenize.punkt import PunktSentenceTokenizer
    return PunktSentenceTokenizer().tokenize


def split_sentences(records: Sequence[TextRecord],
                    splitter: Optional[Callable[[str], List[str]]] = None) -> List[SentenceRecord]:
    """
    Re-chunk records into sentences numbered from 0 within each chapter.

    Consecutive records sharing (part, chapter) are joined with single spaces
    before splitting, so sentences wrapped across lines are kept whole.
    """
    split = splitter or _punkt_splitter()
    out: List[SentenceRecord] = []
    for (part, chapter), run in groupby(records, key=lambda r: (r.part, r.chapter)):
        joined = " ".join(r.text.strip() for r in run)
        sentences = [s.strip() for s in split(joined) if s.strip()]
        for i, s in enumerate(sentences):
            out.append(SentenceRecord(part=part, chapter=chapter, sentence=i, text=s))
    return out
