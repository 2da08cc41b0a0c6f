# usage: pairwise co-occurrence counts of words sharing a group key
import logging
from collections import defaultdict
from itertools import combinations
from typing import Dict, FrozenSet, Hashable, Iterable, Iterator, Mapping, Sequence, Set, Tuple

from textnet.etl.segmenter import SentenceRecord
from textnet.nlp.tokenizers import Token, Tokenizer
from textnet.shared.errors import TokenizerFailure

logger = logging.getLogger(__name__)

CanonicalPair = Tuple[str, str]


def canonical_pair(a: str, b: str) -> CanonicalPair:
    """Order-independent key for an unordered pair of distinct words."""
    if a == b:
        raise ValueError(f"self pair ({a!r}, {b!r}) is not a co-occurrence")
    return (a, b) if a < b else (b, a)


def count_cooccurrences(pairs: Iterable[Tuple[Hashable, str]],
                        *,
                        large_group_warning: int = 500) -> Dict[CanonicalPair, int]:
    """
    Count, for every unordered word pair, the number of groups containing both.

    Each group contributes its *distinct* words once: a word repeated within
    a group does not add extra weight. Groups with zero or one distinct word
    add nothing. The result does not depend on the order of `pairs`.

    Cost is quadratic in the distinct-word count of a group, so groups are
    meant to be small (a line, a sentence). Groups larger than
    `large_group_warning` are logged.
    """
    groups: Dict[Hashable, Set[str]] = defaultdict(set)
    for key, word in pairs:
        groups[key].add(word)

    counts: Dict[CanonicalPair, int] = defaultdict(int)
    for key, words in groups.items():
        if len(words) > large_group_warning:
            logger.warning("group %r holds %d distinct words; pair counting is quadratic", key, len(words))
        for a, b in combinations(sorted(words), 2):
            counts[(a, b)] += 1

    logger.debug("counted %d pairs over %d groups", len(counts), len(groups))
    return dict(counts)


def merge_counts(*mappings: Mapping[CanonicalPair, int]) -> Dict[CanonicalPair, int]:
    """Sum several pair → count mappings (e.g. per-chunk partial results)."""
    out: Dict[CanonicalPair, int] = defaultdict(int)
    for m in mappings:
        for pair, w in m.items():
            out[pair] += w
    return dict(out)


def line_groups(tokens: Iterable[Token]) -> Iterator[Tuple[int, str]]:
    """Group key = record (line) index."""
    for t in tokens:
        yield t.record_index, t.word


def sentence_groups(sentences: Sequence[SentenceRecord],
                    tokenizer: Tokenizer,
                    stopwords: FrozenSet[str] = frozenset()) -> Iterator[Tuple[Tuple[int, int, int], str]]:
    """Group key = (part, chapter, sentence); stopwords are dropped on the way."""
    for s in sentences:
        try:
            words = tokenizer(s.text)
        except Exception as exc:
            raise TokenizerFailure(s.key, f"tokenizer failed on sentence {s.key}: {exc}") from exc
        for w in words:
            if w not in stopwords:
                yield s.key, w
