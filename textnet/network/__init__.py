# Co-occurrence counting and graph construction.

from .cooccurrence import (
    CanonicalPair,
    canonical_pair,
    count_cooccurrences,
    merge_counts,
    line_groups,
    sentence_groups,
)
from .graph import CoOccurrenceEdge, Graph, build_graph, to_networkx, node_table, edge_table

__all__ = [
    "CanonicalPair",
    "canonical_pair",
    "count_cooccurrences",
    "merge_counts",
    "line_groups",
    "sentence_groups",
    "CoOccurrenceEdge",
    "Graph",
    "build_graph",
    "to_networkx",
    "node_table",
    "edge_table",
]

__version__ = "0.1.0"
