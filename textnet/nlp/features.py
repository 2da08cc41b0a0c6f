# Feature extraction utilities: n-grams and word counts
from collections import Counter
from itertools import groupby

import pandas as pd


def make_ngrams(words, n=2):
    """
    Construct n-grams of length n from a list of words.
    Example: words=["i","like","cats"], n=2 → ["i_like", "like_cats"]
    """
    return ["_".join(words[i:i+n]) for i in range(0, max(0, len(words)-n+1))]


def record_ngrams(tokens, n=2):
    """
    Count n-grams built inside each record only.
    Tokens are grouped by consecutive `record_index`, so an n-gram never
    spans the end of one line and the start of the next.
    """
    counts = Counter()
    for _, run in groupby(tokens, key=lambda t: t.record_index):
        counts.update(make_ngrams([t.word for t in run], n))
    return counts


def count_ngrams(tokens, ngram_ns=(1, 2)):
    """
    Count unigrams, bigrams, trigrams, etc. over tokens.
    Returns a dict of {ngram_name: Counter}.
    """
    out = {}
    for n in ngram_ns:
        if n <= 1:
            out["unigram"] = Counter(t.word for t in tokens)
        else:
            out[{2: "bigram", 3: "trigram"}.get(n, f"ngram_{n}")] = record_ngrams(tokens, n)
    return out


def word_counts(frame: pd.DataFrame, by=None) -> pd.DataFrame:
    """
    Word frequencies from a token table, overall or per grouping column(s).
    Sorted by the grouping columns, then count (descending), then word.
    """
    keys = ([by] if isinstance(by, str) else list(by or [])) + ["word"]
    counts = frame.groupby(keys).size().reset_index(name="n")
    order = [c for c in keys if c != "word"]
    return counts.sort_values(order + ["n", "word"], ascending=[True] * len(order) + [False, True]).reset_index(drop=True)
