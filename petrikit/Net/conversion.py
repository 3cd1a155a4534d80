# petrikit/Net/conversion.py
from __future__ import annotations

from typing import Any, Dict, Hashable, List, Tuple

import networkx as nx

from .arc import ArcDescriptor
from .exceptions import DomainError
from .model import DEFAULT_CAPACITY, PetriNet


def net_to_bipartite(
    net: PetriNet,
    *,
    bipartite_values: Tuple[int, int] = (0, 1),
    include_capacity: bool = True,
    weight_attr: str = "weight",
    capacity_attr: str = "capacity",
) -> nx.DiGraph:
    """
    Export a net to a **bipartite** NetworkX DiGraph with arcs
    ``place → transition → place``.

    Node ids are the place and transition identifiers themselves (the two
    domains are disjoint).

    :param net: Net to export.
    :param bipartite_values: Bipartite marker values ``(place_value, transition_value)``.
    :param include_capacity: If ``True``, store each place capacity in ``capacity_attr``.
    :param weight_attr: Edge attribute holding the arc label.
    :param capacity_attr: Node attribute holding the place capacity.
    :returns: Bipartite DiGraph. Nodes carry ``kind`` (``"place"`` or
        ``"transition"``), ``bipartite`` and ``label``; edges carry
        ``role`` (``"pre"`` or ``"post"``) and the weight.

    **Examples**
    ----------
    >>> G = net_to_bipartite(net)
    >>> set(nx.get_node_attributes(G, "kind").values()) == {"place", "transition"}
    True
    """
    G = nx.DiGraph()
    place_val, transition_val = bipartite_values
    capacity = net.capacity

    for p in net.places:
        attrs: Dict[str, Any] = {"bipartite": place_val, "label": str(p), "kind": "place"}
        if include_capacity:
            attrs[capacity_attr] = capacity[p]
        G.add_node(p, **attrs)
    for t in net.transitions:
        G.add_node(t, bipartite=transition_val, label=str(t), kind="transition")

    for t, column in net.input.items():
        for p, w in column.items():
            G.add_edge(p, t, role="pre", **{weight_attr: w})
    for t, column in net.output.items():
        for p, w in column.items():
            G.add_edge(t, p, role="post", **{weight_attr: w})
    return G


def bipartite_to_net(
    G: nx.DiGraph,
    *,
    bipartite_values: Tuple[int, int] = (0, 1),
    weight_attr: str = "weight",
    capacity_attr: str = "capacity",
    default_capacity: int = DEFAULT_CAPACITY,
) -> PetriNet:
    """
    Build a :class:`PetriNet` from a bipartite place/transition graph.

    The logical inverse of :func:`net_to_bipartite`. Node classes are read
    from the ``kind`` attribute, falling back to ``bipartite``. Edges going
    out of a place are preconditions, edges going into a place are
    postconditions. Capacities are used only if every place carries
    ``capacity_attr``; otherwise all places get ``default_capacity``.

    :param G: Directed bipartite graph.
    :param bipartite_values: Bipartite marker values ``(place_value, transition_value)``.
    :param weight_attr: Edge attribute holding the arc label (defaults to 1).
    :param capacity_attr: Node attribute holding the place capacity.
    :param default_capacity: Capacity used when not every place has one.
    :returns: Reconstructed net.
    :raises DomainError: If a node cannot be classified or an edge joins two
        nodes of the same class.
    """
    place_val, transition_val = bipartite_values
    places: List[Hashable] = []
    transitions: List[Hashable] = []
    for n, d in G.nodes(data=True):
        kind = d.get("kind")
        if kind is None:
            b = d.get("bipartite")
            kind = "place" if b == place_val else "transition" if b == transition_val else None
        if kind == "place":
            places.append(n)
        elif kind == "transition":
            transitions.append(n)
        else:
            raise DomainError(f"Cannot tell whether node {n!r} is a place or a transition")

    place_set = set(places)
    arcs: List[ArcDescriptor] = []
    for u, v, ed in G.edges(data=True):
        w = ed.get(weight_attr, 1)
        if u in place_set and v not in place_set:
            arcs.append(ArcDescriptor.pre(u, v, w))
        elif v in place_set and u not in place_set:
            arcs.append(ArcDescriptor.post(u, v, w))
        else:
            raise DomainError(f"Edge {u!r} -> {v!r} does not join a place and a transition")

    capacity = None
    if places and all(capacity_attr in G.nodes[p] for p in places):
        capacity = {p: G.nodes[p][capacity_attr] for p in places}

    return PetriNet(
        places, transitions, arcs, capacity, default_capacity=default_capacity
    )
