import unittest

import spacy

from textnet.nlp.entities import (
    EntityRecord,
    SpacyEntityRecognizer,
    TransformersEntityRecognizer,
    chunk_text,
    entity_groups,
    get_recognizer,
)
from textnet.shared.errors import ConfigError, EntityRecognitionError


def _blank_nlp(max_length=1_000_000):
    nlp = spacy.blank("en")
    nlp.add_pipe("sentencizer")
    ruler = nlp.add_pipe("entity_ruler")
    ruler.add_patterns([
        {"label": "PERSON", "pattern": "Ahab"},
        {"label": "PERSON", "pattern": "Starbuck"},
        {"label": "GPE", "pattern": "Nantucket"},
    ])
    nlp.max_length = max_length
    return nlp


class TestEntityGroups(unittest.TestCase):
    def test_filters_by_type_and_keys_by_sentence(self):
        records = [
            EntityRecord("Elizabeth", "PERSON", 0, 0),
            EntityRecord("Darcy", "PERSON", 0, 0),
            EntityRecord("Pemberley", "GPE", 0, 0),
            EntityRecord("Jane", "PERSON", 0, 1),
            EntityRecord("Elizabeth", "PERSON", 1, 0),
        ]
        self.assertEqual(
            list(entity_groups(records, "PERSON")),
            [((0, 0), "Elizabeth"), ((0, 0), "Darcy"), ((0, 1), "Jane"), ((1, 0), "Elizabeth")],
        )

    def test_other_types(self):
        records = [EntityRecord("London", "GPE", 2, 3), EntityRecord("", "GPE", 2, 3)]
        self.assertEqual(list(entity_groups(records, "GPE")), [((2, 3), "London")])


class TestChunkText(unittest.TestCase):
    def test_cuts_on_sentence_ends(self):
        text = "Ahab spoke. Starbuck listened. Ahab left."
        self.assertEqual(chunk_text(text, 20), ["Ahab spoke.", "Starbuck listened.", "Ahab left."])

    def test_short_or_unchunked_text_is_whole(self):
        self.assertEqual(chunk_text("short text", 100), ["short text"])
        self.assertEqual(chunk_text("x " * 50, 0), ["x " * 50])
        self.assertEqual(chunk_text("   ", 10), [])

    def test_every_chunk_fits(self):
        text = "word " * 300
        chunks = chunk_text(text, 37)
        self.assertTrue(all(len(c) <= 37 for c in chunks))
        self.assertEqual(" ".join(chunks).split(), text.split())


class TestSpacyEntityRecognizer(unittest.TestCase):
    def test_documents_and_sentences(self):
        rec = SpacyEntityRecognizer(nlp=_blank_nlp())
        out = rec(["Ahab met Starbuck. They sailed from Nantucket.", "Starbuck waited."])
        self.assertEqual(out, [
            EntityRecord("Ahab", "PERSON", 0, 0),
            EntityRecord("Starbuck", "PERSON", 0, 0),
            EntityRecord("Nantucket", "GPE", 0, 1),
            EntityRecord("Starbuck", "PERSON", 1, 0),
        ])

    def test_long_block_is_streamed_in_chunks(self):
        rec = SpacyEntityRecognizer(nlp=_blank_nlp(max_length=200), chunk_chars=100)
        block = "Ahab spoke to Starbuck. " * 50
        out = rec([block, "Ahab rested."])
        first = [r for r in out if r.document_id == 0]
        self.assertEqual(len(first), 100)
        self.assertEqual(sorted({r.sentence_id for r in first}), list(range(50)))
        self.assertEqual([r for r in out if r.document_id == 1], [EntityRecord("Ahab", "PERSON", 1, 0)])

    def test_backend_failure_is_wrapped(self):
        rec = SpacyEntityRecognizer(nlp=_blank_nlp(max_length=200), chunk_chars=0)
        with self.assertRaises(EntityRecognitionError) as ctx:
            rec(["Ahab spoke to Starbuck. " * 50])
        self.assertIsInstance(ctx.exception.__cause__, ValueError)


class TestTransformersEntityRecognizer(unittest.TestCase):
    def _fake_pipe(self, sent):
        out = []
        if "Ahab" in sent:
            out.append({"entity_group": "PER", "word": " Ahab", "score": 0.99})
        if "Nantucket" in sent:
            out.append({"entity_group": "LOC", "word": "Nantucket", "score": 0.97})
        return out

    def test_tags_mapped_and_sentences_numbered(self):
        rec = TransformersEntityRecognizer(pipe=self._fake_pipe, splitter=lambda t: t.split(" | "))
        out = rec(["Call me Ishmael | Ahab sails | from Nantucket", "Ahab"])
        self.assertEqual(out, [
            EntityRecord("Ahab", "PERSON", 0, 1),
            EntityRecord("Nantucket", "LOC", 0, 2),
            EntityRecord("Ahab", "PERSON", 1, 0),
        ])

    def test_backend_failure_is_wrapped(self):
        def broken(sent):
            raise RuntimeError("CUDA out of memory")

        rec = TransformersEntityRecognizer(pipe=broken, splitter=lambda t: [t])
        with self.assertRaises(EntityRecognitionError):
            rec(["Ahab"])


class TestGetRecognizer(unittest.TestCase):
    def test_backends(self):
        self.assertIsInstance(get_recognizer("spacy"), SpacyEntityRecognizer)
        self.assertIsInstance(get_recognizer("transformers"), TransformersEntityRecognizer)
        with self.assertRaises(ConfigError):
            get_recognizer("stanza")


if __name__ == "__main__":
    unittest.main()
