# usage: immutable run configuration threaded through the pipeline
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from textnet.shared.errors import ConfigError

GROUP_KEYS = ("line", "sentence")


@dataclass(frozen=True)
class PipelineConfig:
    """
    Everything one run needs, fixed at start-up.

    stopwords: lowercase words removed after tokenization (load once with
        `textnet.nlp.load_stopwords`).
    group_by: "line" (record index) or "sentence" (part, chapter, sentence)
        as the co-occurrence context. Ignored when `entity_type` is set,
        which always groups by (document, sentence).
    min_weight: drop graph edges seen in fewer groups than this.
    """
    stopwords: FrozenSet[str] = field(default_factory=frozenset)
    group_by: str = "line"
    min_weight: Optional[int] = None
    ngram_ns: Tuple[int, ...] = (1, 2)
    topn: int = 50
    strip_gutenberg: bool = True
    tokenizer: str = "word"
    entity_type: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "stopwords", frozenset(self.stopwords))
        object.__setattr__(self, "ngram_ns", tuple(self.ngram_ns))
        if self.group_by not in GROUP_KEYS:
            raise ConfigError(f"group_by must be one of {GROUP_KEYS}, got {self.group_by!r}")
        if self.min_weight is not None and self.min_weight < 1:
            raise ConfigError(f"min_weight must be >= 1, got {self.min_weight}")
        if any(n < 1 for n in self.ngram_ns):
            raise ConfigError(f"n-gram sizes must be >= 1, got {self.ngram_ns}")
        if self.topn < 1:
            raise ConfigError(f"topn must be >= 1, got {self.topn}")
        upper = sorted(w for w in self.stopwords if w != w.lower())
        if upper:
            raise ConfigError(f"stopwords must be lowercase; offending: {', '.join(upper[:5])}")
