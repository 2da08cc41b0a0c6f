# usage: tokenizer adapters (NLTK regex words / tweets) and the record -> token step
import logging
import re
from dataclasses import dataclass
from typing import List, Protocol, Sequence

import pandas as pd
from nltk.tokenize import RegexpTokenizer, TweetTokenizer

from textnet.etl.segmenter import TextRecord
from textnet.shared.errors import ConfigError, TokenizerFailure

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"^(?:https?://|www\.)", re.IGNORECASE)


class Tokenizer(Protocol):
    """Anything that turns one text into lowercase, punctuation-free words, in order."""

    def __call__(self, text: str) -> Sequence[str]:
        ...


@dataclass(frozen=True)
class Token:
    record_index: int
    word: str


class WordTokenizer:
    """Lowercase words: letters/digits with in-word apostrophes ("don't" stays whole)."""

    def __init__(self):
        self._tok = RegexpTokenizer(r"[^\W_]+(?:['’][^\W_]+)*")

    def __call__(self, text: str) -> List[str]:
        return self._tok.tokenize(text.lower())


class TweetTokenizerAdapter:
    """
    NLTK TweetTokenizer with the word contract applied on top.

    Emoticons and punctuation-only tokens are dropped, URLs are dropped, and
    hashtag / mention sigils are stripped so "#Cats" and "cats" count together.
    """

    def __init__(self, *, reduce_len: bool = True):
        self._tok = TweetTokenizer(preserve_case=False, reduce_len=reduce_len)

    def __call__(self, text: str) -> List[str]:
        out = []
        for t in self._tok.tokenize(text):
            if _URL_RE.match(t):
                continue
            w = t.lstrip("#@")
            if not w or re.fullmatch(r"[\W_]+", w):
                continue
            out.append(w.lower())
        return out


_TOKENIZERS = {
    "word": WordTokenizer,
    "tweet": TweetTokenizerAdapter,
}


def get_tokenizer(name: str) -> Tokenizer:
    try:
        return _TOKENIZERS[name]()
    except KeyError:
        raise ConfigError(f"unknown tokenizer {name!r}; choose from {sorted(_TOKENIZERS)}") from None


def tokenize_records(records: Sequence[TextRecord], tokenizer: Tokenizer) -> List[Token]:
    """
    Tokenize every record, keeping the record index on each token.

    A failure inside the tokenizer is re-raised as TokenizerFailure for that
    record; nothing is dropped, so token indices always line up with the
    part/chapter labels of their records.
    """
    tokens: List[Token] = []
    for rec in records:
        try:
            words = tokenizer(rec.text)
        except Exception as exc:
            raise TokenizerFailure(rec.index, f"tokenizer failed on record {rec.index}: {exc}") from exc
        tokens.extend(Token(rec.index, w) for w in words)
    logger.debug("tokenized %d records into %d tokens", len(records), len(tokens))
    return tokens


def tokens_frame(records: Sequence[TextRecord], tokens: Sequence[Token]) -> pd.DataFrame:
    """
    Build the tidy document-token table: one row per token with columns
    `index, part, chapter, word`, in token order.
    """
    meta = {r.index: (r.part, r.chapter) for r in records}
    rows = [
        {"index": t.record_index, "part": meta[t.record_index][0],
         "chapter": meta[t.record_index][1], "word": t.word}
        for t in tokens
    ]
    return pd.DataFrame(rows, columns=["index", "part", "chapter", "word"])
