import unittest

from textnet.config import PipelineConfig
from textnet.shared.errors import ConfigError


class TestPipelineConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = PipelineConfig()
        self.assertEqual(cfg.group_by, "line")
        self.assertIsNone(cfg.min_weight)
        self.assertEqual(cfg.stopwords, frozenset())

    def test_stopwords_frozen(self):
        cfg = PipelineConfig(stopwords={"the", "a"})
        self.assertIsInstance(cfg.stopwords, frozenset)

    def test_immutable(self):
        cfg = PipelineConfig()
        with self.assertRaises(AttributeError):
            cfg.group_by = "sentence"

    def test_invalid_values(self):
        bad = [
            {"group_by": "chapter"},
            {"min_weight": 0},
            {"ngram_ns": (0, 2)},
            {"topn": 0},
            {"stopwords": {"The"}},
        ]
        for kwargs in bad:
            with self.assertRaises(ConfigError, msg=str(kwargs)):
                PipelineConfig(**kwargs)


if __name__ == "__main__":
    unittest.main()
