# usage: textnet-build --input "novel.txt|dir" --outdir "data/networks" [--group-by line|sentence] [--min-weight 2]
# Builds word (or character) co-occurrence networks plus n-gram and chapter sentiment tables.

import argparse
import logging
from dataclasses import dataclass
from itertools import groupby
from pathlib import Path
from typing import Counter, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from textnet.config import PipelineConfig
from textnet.etl import (
    TextRecord,
    iter_text_files,
    normalize_line,
    read_lines,
    segment_lines,
    split_sentences,
    strip_gutenberg_lines,
)
from textnet.network.cooccurrence import count_cooccurrences, line_groups, sentence_groups
from textnet.network.graph import Graph, build_graph, edge_table, node_table
from textnet.nlp.entities import EntityRecognizer, SpacyEntityRecognizer, entity_groups, get_recognizer
from textnet.nlp.features import count_ngrams
from textnet.nlp.preprocessing import filter_stopwords, load_stopwords
from textnet.nlp.sentiment import chapter_sentiment, join_sentiment, load_lexicon, vader_lexicon
from textnet.nlp.tokenizers import Token, Tokenizer, get_tokenizer, tokenize_records, tokens_frame
from textnet.shared.errors import TextnetError
from textnet.shared.io_utils import output_tag, write_json, write_table

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    records: List[TextRecord]
    tokens: List[Token]
    frame: pd.DataFrame
    counts: Dict[tuple, int]
    graph: Graph
    ngrams: Dict[str, Counter]
    sentiment: Optional[pd.DataFrame] = None


def chapter_texts(records: Sequence[TextRecord]) -> List[str]:
    """One text block per (part, chapter) run, lines joined with spaces."""
    return [
        " ".join(r.text.strip() for r in run)
        for _, run in groupby(records, key=lambda r: (r.part, r.chapter))
    ]


def run_pipeline(lines: Sequence[str],
                 config: PipelineConfig,
                 *,
                 tokenizer: Optional[Tokenizer] = None,
                 lexicon: Optional[Dict[str, float]] = None,
                 recognizer: Optional[EntityRecognizer] = None,
                 splitter=None) -> PipelineResult:
    """
    Raw lines -> records -> tokens -> grouped pairs -> weighted graph.

    Steps:
      1) Optionally strip Gutenberg boilerplate, then NFKC-normalize lines.
      2) Segment into part/chapter-labelled records.
      3) Tokenize and drop stopwords.
      4) Pick the group key: line index, (part, chapter, sentence), or, when
         `config.entity_type` is set, (chapter block, sentence) over entities.
      5) Count co-occurrences and build the thresholded graph.
      6) Count n-grams; join the sentiment lexicon if one is given.
    """
    if config.strip_gutenberg:
        lines = strip_gutenberg_lines(lines)
    records = segment_lines(normalize_line(ln) for ln in lines)

    tok = tokenizer or get_tokenizer(config.tokenizer)
    tokens = filter_stopwords(tokenize_records(records, tok), config.stopwords)
    frame = tokens_frame(records, tokens)

    if config.entity_type:
        rec = recognizer or SpacyEntityRecognizer()
        pairs = entity_groups(rec(chapter_texts(records)), config.entity_type)
    elif config.group_by == "sentence":
        pairs = sentence_groups(split_sentences(records, splitter), tok, config.stopwords)
    else:
        pairs = line_groups(tokens)

    counts = count_cooccurrences(pairs)
    graph = build_graph(counts, config.min_weight)
    logger.info("%d records, %d tokens -> %d nodes, %d edges",
                len(records), len(tokens), len(graph.nodes), len(graph))

    sentiment = None
    if lexicon is not None:
        sentiment = chapter_sentiment(join_sentiment(frame, lexicon))

    return PipelineResult(
        records=records,
        tokens=tokens,
        frame=frame,
        counts=counts,
        graph=graph,
        ngrams=count_ngrams(tokens, config.ngram_ns),
        sentiment=sentiment,
    )


def write_outputs(result: PipelineResult, config: PipelineConfig, src: Path, outdir: Path) -> dict:
    """Write edge/node/n-gram/sentiment tables and a JSON summary; return the summary."""
    tag = output_tag(src)
    write_table(edge_table(result.graph), outdir, tag, "edges")
    nodes = node_table(result.graph)
    write_table(nodes, outdir, tag, "nodes")

    for name, counter in result.ngrams.items():
        top = pd.DataFrame(counter.most_common(config.topn), columns=[name, "count"])
        write_table(top, outdir, tag, f"{name}_top{config.topn}")

    if result.sentiment is not None:
        write_table(result.sentiment, outdir, tag, "chapter_sentiment")

    summary = {
        "file": str(src),
        "group_by": "entity:" + config.entity_type if config.entity_type else config.group_by,
        "min_weight": config.min_weight,
        "records": len(result.records),
        "parts": int(result.frame["part"].max()) if len(result.frame) else 0,
        "tokens": len(result.tokens),
        "vocab_size": int(result.frame["word"].nunique()),
        "nodes": len(result.graph.nodes),
        "edges": len(result.graph),
        "mean_degree": float(np.mean(nodes["degree"])) if len(nodes) else 0.0,
    }
    write_json(summary, outdir, tag, "summary")
    print(f"NET ✓ {src.name} -> {tag}_edges.csv ({summary['edges']} edges)")
    return summary


def _resolve_lexicon(choice: str) -> Optional[Dict[str, float]]:
    if choice == "none":
        return None
    if choice == "vader":
        return vader_lexicon()
    return load_lexicon(choice)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Build co-occurrence networks from novel-length .txt files.")
    ap.add_argument("--input", required=True, help="UTF-8 .txt file or directory of .txt files.")
    ap.add_argument("--outdir", default="data/networks", help="Output directory for CSV/JSON.")
    ap.add_argument("--group-by", choices=("line", "sentence"), default="line",
                    help="Co-occurrence context: line index or chapter sentence.")
    ap.add_argument("--min-weight", type=int, default=None, help="Drop edges seen in fewer groups.")
    ap.add_argument("--stopwords", default="nltk", help="nltk | spacy | none | path to word list")
    ap.add_argument("--tokenizer", choices=("word", "tweet"), default="word")
    ap.add_argument("--ngrams", default="1,2", help="Comma list: e.g., 1,2,3")
    ap.add_argument("--topn", type=int, default=50)
    ap.add_argument("--lexicon", default="vader", help="vader | none | path to word,score CSV")
    ap.add_argument("--entities", default=None, metavar="TYPE",
                    help="Build a character network over entities of TYPE (e.g. PERSON).")
    ap.add_argument("--ner-backend", choices=("spacy", "transformers"), default="spacy",
                    help="Entity recognizer used with --entities.")
    ap.add_argument("--no-strip-gutenberg", action="store_true", help="Keep Project Gutenberg headers/footers.")
    ap.add_argument("--verbose", action="store_true")
    return ap


def main(argv=None):
    """CLI entrypoint: one network per input file."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s: %(message)s")

    try:
        config = PipelineConfig(
            stopwords=load_stopwords(args.stopwords),
            group_by=args.group_by,
            min_weight=args.min_weight,
            ngram_ns=tuple(sorted({int(n.strip()) for n in args.ngrams.split(",") if n.strip()})),
            topn=args.topn,
            strip_gutenberg=not args.no_strip_gutenberg,
            tokenizer=args.tokenizer,
            entity_type=args.entities,
        )
        lexicon = _resolve_lexicon(args.lexicon)
        recognizer = get_recognizer(args.ner_backend) if args.entities else None
        outdir = Path(args.outdir)
        for p in iter_text_files(args.input):
            result = run_pipeline(read_lines(p), config, lexicon=lexicon, recognizer=recognizer)
            write_outputs(result, config, p, outdir)
    except TextnetError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
