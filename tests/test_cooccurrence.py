import logging
import random
import unittest

from textnet.etl.segmenter import SentenceRecord
from textnet.network.cooccurrence import (
    canonical_pair,
    count_cooccurrences,
    line_groups,
    merge_counts,
    sentence_groups,
)
from textnet.nlp.tokenizers import Token, WordTokenizer
from textnet.shared.errors import TokenizerFailure


class TestCanonicalPair(unittest.TestCase):
    def test_order_independent(self):
        self.assertEqual(canonical_pair("sat", "cat"), ("cat", "sat"))
        self.assertEqual(canonical_pair("cat", "sat"), ("cat", "sat"))

    def test_self_pair_rejected(self):
        with self.assertRaises(ValueError):
            canonical_pair("cat", "cat")


class TestCountCooccurrences(unittest.TestCase):
    def test_line_scenario(self):
        tokens = [Token(0, "cat"), Token(0, "sat"), Token(1, "cat"), Token(1, "ran")]
        counts = count_cooccurrences(line_groups(tokens))
        self.assertEqual(counts, {("cat", "sat"): 1, ("cat", "ran"): 1})
        self.assertNotIn(("ran", "sat"), counts)

    def test_weight_counts_groups_not_occurrences(self):
        pairs = [(0, "x"), (0, "y"), (0, "x"), (1, "y"), (1, "x"), (1, "y")]
        self.assertEqual(count_cooccurrences(pairs), {("x", "y"): 2})

    def test_no_self_pairs(self):
        pairs = [(0, "echo"), (0, "echo"), (1, "echo"), (1, "cave")]
        counts = count_cooccurrences(pairs)
        self.assertTrue(all(a != b for a, b in counts))
        self.assertEqual(counts, {("cave", "echo"): 1})

    def test_empty_and_single_word_groups_are_no_ops(self):
        self.assertEqual(count_cooccurrences([]), {})
        self.assertEqual(count_cooccurrences([(0, "alone"), (1, "again"), (1, "again")]), {})

    def test_group_order_does_not_matter(self):
        rng = random.Random(7)
        vocab = ["ahab", "whale", "sea", "ship", "harpoon", "captain", "white"]
        pairs = [(g, rng.choice(vocab)) for g in range(40) for _ in range(4)]
        expected = count_cooccurrences(pairs)
        for _ in range(5):
            shuffled = list(pairs)
            rng.shuffle(shuffled)
            self.assertEqual(count_cooccurrences(shuffled), expected)

    def test_keys_are_canonical(self):
        counts = count_cooccurrences([(0, "zebra"), (0, "apple"), (1, "apple"), (1, "zebra")])
        self.assertEqual(counts, {("apple", "zebra"): 2})

    def test_large_group_is_logged(self):
        pairs = [(0, f"w{i}") for i in range(6)]
        with self.assertLogs("textnet.network.cooccurrence", level=logging.WARNING):
            counts = count_cooccurrences(pairs, large_group_warning=5)
        self.assertEqual(len(counts), 15)


class TestMergeCounts(unittest.TestCase):
    def test_partial_results_sum_to_whole(self):
        pairs = [(0, "a"), (0, "b"), (1, "a"), (1, "b"), (1, "c"), (2, "b"), (2, "c")]
        whole = count_cooccurrences(pairs)
        left = count_cooccurrences(p for p in pairs if p[0] < 1)
        right = count_cooccurrences(p for p in pairs if p[0] >= 1)
        self.assertEqual(merge_counts(left, right), whole)
        self.assertEqual(merge_counts(right, left), whole)


class TestSentenceGroups(unittest.TestCase):
    def test_keys_and_stopwords(self):
        sents = [
            SentenceRecord(1, 2, 0, "The cat sat."),
            SentenceRecord(1, 2, 1, "The cat ran."),
        ]
        pairs = list(sentence_groups(sents, WordTokenizer(), frozenset({"the"})))
        self.assertEqual(pairs, [
            ((1, 2, 0), "cat"), ((1, 2, 0), "sat"),
            ((1, 2, 1), "cat"), ((1, 2, 1), "ran"),
        ])

    def test_tokenizer_failure_names_the_sentence(self):
        def flaky(text):
            if "boom" in text:
                raise RuntimeError("cannot tokenize")
            return text.lower().split()

        sents = [SentenceRecord(0, 1, 0, "fine words"), SentenceRecord(0, 1, 1, "boom here")]
        with self.assertRaises(TokenizerFailure) as ctx:
            list(sentence_groups(sents, flaky))
        self.assertEqual(ctx.exception.record_index, (0, 1, 1))
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)


if __name__ == "__main__":
    unittest.main()
