# usage: sentiment lexicon joins over the token table (VADER lexicon or a custom CSV)
import logging
from pathlib import Path
from typing import Dict

import nltk
import numpy as np
import pandas as pd

from textnet.shared.errors import ConfigError

logger = logging.getLogger(__name__)


def vader_lexicon() -> Dict[str, float]:
    """Return the VADER word → valence lexicon, fetching it quietly if missing."""
    try:
        nltk.data.find("sentiment/vader_lexicon.zip")
    except LookupError:
        nltk.download("vader_lexicon", quiet=True)
    from nltk.sentiment import SentimentIntensityAnalyzer
    return dict(SentimentIntensityAnalyzer().lexicon)


def load_lexicon(path) -> Dict[str, float]:
    """Read a `word,score` CSV lexicon; words are lowercased to match tokens."""
    df = pd.read_csv(Path(path))
    missing = {"word", "score"} - set(df.columns)
    if missing:
        raise ConfigError(f"lexicon {path} lacks column(s): {', '.join(sorted(missing))}")
    return {str(w).lower(): float(s) for w, s in zip(df["word"], df["score"])}


def join_sentiment(frame: pd.DataFrame, lexicon: Dict[str, float]) -> pd.DataFrame:
    """Inner-join the token table with the lexicon on `word`, adding a `score` column."""
    lex = pd.DataFrame({"word": list(lexicon.keys()), "score": list(lexicon.values())})
    return frame.merge(lex, on="word", how="inner")


def chapter_sentiment(joined: pd.DataFrame) -> pd.DataFrame:
    """
    Net sentiment per (part, chapter).

    Columns: part, chapter, n_words (lexicon hits), score (sum),
    mean_score, label (positive / negative / neutral by sign of the sum).
    """
    rows = []
    for (part, chapter), grp in joined.groupby(["part", "chapter"], sort=True):
        scores = grp["score"].to_numpy(dtype=float)
        total = float(scores.sum())
        rows.append({
            "part": int(part),
            "chapter": int(chapter),
            "n_words": int(scores.size),
            "score": total,
            "mean_score": float(np.mean(scores)) if scores.size else 0.0,
            "label": "positive" if total > 0 else "negative" if total < 0 else "neutral",
        })
    logger.debug("scored %d chapters", len(rows))
    return pd.DataFrame(rows, columns=["part", "chapter", "n_words", "score", "mean_score", "label"])
