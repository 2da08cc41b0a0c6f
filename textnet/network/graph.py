# usage: weighted undirected co-occurrence graph, with networkx / pandas exports
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, FrozenSet, Mapping, Optional, Set, Tuple

import networkx as nx
import pandas as pd

from textnet.network.cooccurrence import CanonicalPair, canonical_pair
from textnet.shared.errors import ConfigError


@dataclass(frozen=True)
class CoOccurrenceEdge:
    source: str
    target: str
    weight: int


@dataclass(frozen=True)
class Graph:
    nodes: FrozenSet[str]
    edges: Tuple[CoOccurrenceEdge, ...]

    def edge_set(self) -> Set[Tuple[str, str, int]]:
        return {(e.source, e.target, e.weight) for e in self.edges}

    def __len__(self) -> int:
        return len(self.edges)


def build_graph(counts: Mapping[Tuple[str, str], int], min_weight: Optional[int] = None) -> Graph:
    """
    Turn pair → weight counts into a simple undirected graph.

    Steps:
    - Fold (a, b) and (b, a) into one canonical (min, max) key, summing weights.
    - Drop self pairs.
    - Drop pairs whose weight is below `min_weight` (None keeps everything).
    - Nodes are the endpoints of the surviving edges; isolated words vanish.

    Edges come out sorted by (source, target), so the same input always
    yields an identical Graph.
    """
    if min_weight is not None and min_weight < 1:
        raise ConfigError(f"min_weight must be >= 1, got {min_weight}")

    merged: Dict[CanonicalPair, int] = defaultdict(int)
    for (a, b), w in counts.items():
        if a == b:
            continue
        merged[canonical_pair(a, b)] += w

    threshold = min_weight or 1
    edges = tuple(
        CoOccurrenceEdge(a, b, w)
        for (a, b), w in sorted(merged.items())
        if w >= threshold
    )
    nodes = frozenset(n for e in edges for n in (e.source, e.target))
    return Graph(nodes=nodes, edges=edges)


def to_networkx(graph: Graph) -> nx.Graph:
    """networkx view of the graph; nodes carry `degree` and `strength` (weighted degree)."""
    g = nx.Graph()
    g.add_nodes_from(sorted(graph.nodes))
    g.add_weighted_edges_from((e.source, e.target, e.weight) for e in graph.edges)
    nx.set_node_attributes(g, dict(g.degree()), "degree")
    nx.set_node_attributes(g, dict(g.degree(weight="weight")), "strength")
    return g


def node_table(graph: Graph) -> pd.DataFrame:
    g = to_networkx(graph)
    df = pd.DataFrame(
        [(n, d["degree"], d["strength"]) for n, d in g.nodes(data=True)],
        columns=["node", "degree", "strength"],
    )
    return df.sort_values(["degree", "strength", "node"], ascending=[False, False, True]).reset_index(drop=True)


def edge_table(graph: Graph) -> pd.DataFrame:
    df = pd.DataFrame(
        [(e.source, e.target, e.weight) for e in graph.edges],
        columns=["source", "target", "weight"],
    )
    return df.sort_values(["weight", "source", "target"], ascending=[False, True, True]).reset_index(drop=True)
