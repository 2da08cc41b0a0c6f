# Expose core NLP utilities for easier imports when using this package.

from .tokenizers import (                      # Tokenizer adapters and the record -> token step
    Token,
    Tokenizer,
    WordTokenizer,
    TweetTokenizerAdapter,
    get_tokenizer,
    tokenize_records,
    tokens_frame,
)
from .preprocessing import load_stopwords, filter_stopwords, stem_tokens
from .features import make_ngrams, record_ngrams, count_ngrams, word_counts
from .sentiment import vader_lexicon, load_lexicon, join_sentiment, chapter_sentiment
from .entities import (                        # NER boundary (character networks)
    EntityRecord,
    EntityRecognizer,
    SpacyEntityRecognizer,
    TransformersEntityRecognizer,
    chunk_text,
    entity_groups,
    get_recognizer,
)

__all__ = [
    "Token",
    "Tokenizer",
    "WordTokenizer",
    "TweetTokenizerAdapter",
    "get_tokenizer",
    "tokenize_records",
    "tokens_frame",
    "load_stopwords",
    "filter_stopwords",
    "stem_tokens",
    "make_ngrams",
    "record_ngrams",
    "count_ngrams",
    "word_counts",
    "vader_lexicon",
    "load_lexicon",
    "join_sentiment",
    "chapter_sentiment",
    "EntityRecord",
    "EntityRecognizer",
    "SpacyEntityRecognizer",
    "TransformersEntityRecognizer",
    "chunk_text",
    "entity_groups",
    "get_recognizer",
]

# Package version identifier
__version__ = "0.1.0"
