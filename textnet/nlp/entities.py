# usage: named-entity recognition backends (spaCy default, transformers optional)
import logging
from dataclasses import dataclass
from typing import Hashable, Iterator, List, Protocol, Sequence, Tuple

from textnet.shared.errors import ConfigError, EntityRecognitionError

logger = logging.getLogger(__name__)

# Transformer NER models use CoNLL tags; report them with spaCy's names.
_CONLL_TO_SPACY = {"PER": "PERSON", "LOC": "LOC", "ORG": "ORG", "MISC": "MISC"}


@dataclass(frozen=True)
class EntityRecord:
    token: str
    entity_type: str
    document_id: int
    sentence_id: int


class EntityRecognizer(Protocol):
    def __call__(self, texts: Sequence[str]) -> List[EntityRecord]:
        ...


def chunk_text(text: str, chunk_chars: int = 120_000) -> List[str]:
    """
    Slice a long text block into pieces of at most `chunk_chars` characters.

    Cuts prefer the last ". " inside the window, then the last space, and
    only split mid-word when a window holds neither. `chunk_chars <= 0`
    keeps the block whole.
    """
    if not chunk_chars or chunk_chars <= 0 or len(text) <= chunk_chars:
        return [text] if text.strip() else []
    out, start = [], 0
    while start < len(text):
        end = min(start + chunk_chars, len(text))
        if end < len(text):
            cut = text.rfind(". ", start, end)
            if cut > start:
                end = cut + 1
            else:
                space = text.rfind(" ", start, end)
                if space > start:
                    end = space
        piece = text[start:end].strip()
        if piece:
            out.append(piece)
        start = end
    return out


class SpacyEntityRecognizer:
    """
    spaCy pipeline NER, streamed in character chunks like the preprocessing
    stage so chapter-sized (or whole-novel) blocks never hit `max_length`.

    `document_id` is the index of the input block; `sentence_id` keeps
    counting across the chunks of one block. The model is loaded on first
    use; a missing model raises EntityRecognitionError with the download hint.
    """

    def __init__(self, model: str = "en_core_web_sm", *, nlp=None,
                 chunk_chars: int = 120_000, batch_size: int = 8):
        self.model = model
        self.chunk_chars = chunk_chars
        self.batch_size = batch_size
        self._nlp = nlp

    def _load(self):
        if self._nlp is None:
            import spacy
            try:
                nlp = spacy.load(self.model, exclude=["textcat", "lemmatizer"])
            except OSError as exc:
                raise EntityRecognitionError(
                    f"spaCy model {self.model!r} not installed; run `python -m spacy download {self.model}`"
                ) from exc
            nlp.max_length = 1_000_000_000
            self._nlp = nlp
        return self._nlp

    def __call__(self, texts: Sequence[str]) -> List[EntityRecord]:
        nlp = self._load()
        items = [(chunk, doc_id) for doc_id, text in enumerate(texts)
                 for chunk in chunk_text(text, self.chunk_chars)]
        out: List[EntityRecord] = []
        sent_counts = {}
        try:
            for doc, doc_id in nlp.pipe(items, as_tuples=True, batch_size=self.batch_size):
                sent_id = sent_counts.get(doc_id, 0)
                for sent in doc.sents:
                    for ent in sent.ents:
                        out.append(EntityRecord(ent.text.strip(), ent.label_, doc_id, sent_id))
                    sent_id += 1
                sent_counts[doc_id] = sent_id
        except Exception as exc:
            raise EntityRecognitionError(f"spaCy NER failed: {exc}") from exc
        return out


class TransformersEntityRecognizer:
    """Hugging Face token-classification pipeline, run sentence by sentence."""

    def __init__(self, model: str = "dslim/bert-base-NER", *, pipe=None, splitter=None):
        self.model = model
        self._pipe = pipe
        self._splitter = splitter

    def _load(self):
        if self._pipe is None:
            import torch
            from transformers import pipeline as hf_pipeline
            device = 0 if torch.cuda.is_available() else -1
            logger.info("loading %s on %s", self.model, "cuda" if device == 0 else "cpu")
            try:
                self._pipe = hf_pipeline("ner", model=self.model,
                                         aggregation_strategy="simple", device=device)
            except OSError as exc:
                raise EntityRecognitionError(f"could not load NER model {self.model!r}") from exc
        if self._splitter is None:
            from nltk.tokenize.punkt import PunktSentenceTokenizer
            self._splitter = PunktSentenceTokenizer().tokenize
        return self._pipe

    def __call__(self, texts: Sequence[str]) -> List[EntityRecord]:
        ner = self._load()
        out: List[EntityRecord] = []
        for doc_id, text in enumerate(texts):
            for sent_id, sent in enumerate(self._splitter(text)):
                try:
                    found = ner(sent)
                except Exception as exc:
                    raise EntityRecognitionError(
                        f"NER failed on document {doc_id}, sentence {sent_id}: {exc}"
                    ) from exc
                for ent in found:
                    label = ent["entity_group"]
                    out.append(EntityRecord(ent["word"].strip(), _CONLL_TO_SPACY.get(label, label),
                                            doc_id, sent_id))
        return out


_BACKENDS = {
    "spacy": SpacyEntityRecognizer,
    "transformers": TransformersEntityRecognizer,
}


def get_recognizer(name: str = "spacy") -> EntityRecognizer:
    try:
        return _BACKENDS[name]()
    except KeyError:
        raise ConfigError(f"unknown NER backend {name!r}; choose from {sorted(_BACKENDS)}") from None


def entity_groups(records: Sequence[EntityRecord],
                  entity_type: str = "PERSON") -> Iterator[Tuple[Tuple[Hashable, Hashable], str]]:
    """Yield ((document_id, sentence_id), token) for entities of the target type."""
    for r in records:
        if r.entity_type == entity_type and r.token:
            yield (r.document_id, r.sentence_id), r.token
