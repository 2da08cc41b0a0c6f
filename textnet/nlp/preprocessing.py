# usage: stopword loading / filtering and Porter stemming over tokens
import logging
from pathlib import Path
from typing import FrozenSet, Iterable, List, TypeVar, Union

import nltk
from nltk.stem import PorterStemmer

from textnet.nlp.tokenizers import Token

logger = logging.getLogger(__name__)

T = TypeVar("T", Token, str)


def _ensure_nltk(pkg: str, locator: str) -> None:
    try:
        nltk.data.find(locator)
    except LookupError:
        logger.info("downloading NLTK resource %s", pkg)
        nltk.download(pkg, quiet=True)


def _nltk_stopwords() -> Iterable[str]:
    _ensure_nltk("stopwords", "corpora/stopwords")
    from nltk.corpus import stopwords
    return stopwords.words("english")


def _spacy_stopwords() -> Iterable[str]:
    # The language class ships the list; no trained pipeline is needed.
    from spacy.lang.en.stop_words import STOP_WORDS
    return STOP_WORDS


def load_stopwords(source: Union[str, Path] = "nltk") -> FrozenSet[str]:
    """
    Load an English stopword set once, for the whole run.

    source:
      - "nltk"  → NLTK English stopword corpus (fetched quietly if missing)
      - "spacy" → spaCy's English STOP_WORDS
      - "none"  → empty set (keep every token)
      - anything else → path to a newline-delimited word list

    Words are stripped and lowercased to match the tokenizer's casing.
    """
    if source == "nltk":
        words = _nltk_stopwords()
    elif source == "spacy":
        words = _spacy_stopwords()
    elif source == "none":
        words = ()
    else:
        words = Path(source).read_text(encoding="utf-8").splitlines()
    out = frozenset(w.strip().lower() for w in words if w.strip())
    logger.debug("loaded %d stopwords from %s", len(out), source)
    return out


def filter_stopwords(tokens: Iterable[T], stopwords: FrozenSet[str]) -> List[T]:
    """Drop tokens whose word is in `stopwords` (exact match), keeping order."""
    return [t for t in tokens if (t.word if isinstance(t, Token) else t) not in stopwords]


def stem_tokens(tokens: Iterable[Token], stemmer=None) -> List[Token]:
    """Porter-stem each token's word; the record index is carried over unchanged."""
    stemmer = stemmer or PorterStemmer()
    return [Token(t.record_index, stemmer.stem(t.word)) for t in tokens]
