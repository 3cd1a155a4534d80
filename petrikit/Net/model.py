"""
Structural description of a bounded Petri net.

:class:`PetriNet` stores the places, the transitions, the pre/post incidence
matrices and a per-place capacity. Places and transitions are dense indices
into the declared domains, so both matrices are ``numpy`` integer arrays of
shape ``(n_places, n_transitions)`` (zero means "no arc", since arc labels are
strictly positive). A built net is read-only; markings are stored outside of
it and passed to the engines in :mod:`.firing`, :mod:`.reverse` and
:mod:`.canonical`, which are also exposed here as methods.

.. code-block:: python

    from petrikit.Net import ArcDescriptor as Arc, PetriNet

    net = PetriNet(
        places=["on", "off"],
        transitions=["switchOn", "switchOff"],
        arcs=[
            Arc.pre("on", "switchOff"),
            Arc.post("switchOff", "off"),
            Arc.pre("off", "switchOn"),
            Arc.post("switchOn", "on"),
        ],
    )
    net.fire("switchOff", {"on": 1, "off": 0})   # Marking(on:0, off:1)
"""

from __future__ import annotations

import logging
from numbers import Integral
from typing import (
    Any,
    Dict,
    Hashable,
    Iterable,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
    Union,
)

import networkx as nx
import numpy as np

from . import canonical, firing, reverse
from .arc import ArcDescriptor
from .exceptions import (
    CapacityMismatchError,
    DomainError,
    DuplicateArcError,
    MarkingError,
    UndeclaredEntityError,
)
from .marking import Marking
from .utils import index_of, normalize_domain

LOGGER = logging.getLogger(__name__)

DEFAULT_CAPACITY = 20

Matrix = Dict[Hashable, Dict[Hashable, int]]
MarkingLike = Union[Marking, Mapping[Hashable, int]]


class PetriNet:
    """
    Immutable bounded Petri net.

    :param places: Declared places, as an ordered sequence (or a set, which is
        ordered by ``str``).
    :type places: Iterable[Hashable]
    :param transitions: Declared transitions, same conventions as ``places``.
    :type transitions: Iterable[Hashable]
    :param arcs: Arc descriptors built with :meth:`ArcDescriptor.pre` and
        :meth:`ArcDescriptor.post`.
    :type arcs: Iterable[ArcDescriptor]
    :param capacity: Optional ``place -> max tokens`` map. ``None`` or an empty
        map gives every place ``default_capacity``.
    :type capacity: Optional[Mapping[Hashable, int]]
    :param default_capacity: Capacity used when ``capacity`` is not given.
    :type default_capacity: int
    :raises DomainError: Duplicate identifiers, or a name used both as place
        and transition.
    :raises DuplicateArcError: Two arcs of one direction on the same
        (place, transition) pair.
    :raises UndeclaredEntityError: An arc names an undeclared place or
        transition.
    :raises CapacityMismatchError: The capacity keys differ from the places,
        or a capacity is not a non-negative integer.
    """

    def __init__(
        self,
        places: Iterable[Hashable],
        transitions: Iterable[Hashable],
        arcs: Iterable[ArcDescriptor] = (),
        capacity: Optional[Mapping[Hashable, int]] = None,
        *,
        default_capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        self._places = normalize_domain(places, "place")
        self._transitions = normalize_domain(transitions, "transition")
        shared = set(self._places) & set(self._transitions)
        if shared:
            raise DomainError(
                f"Identifiers declared both as place and transition: {sorted(shared, key=str)}"
            )
        self._place_index = index_of(self._places)
        self._transition_index = index_of(self._transitions)

        arcs = list(arcs)
        pre: Matrix = {}
        post: Matrix = {}
        for arc in arcs:
            self._add_arc(arc, pre if arc.is_pre else post)
        self._check_declared(pre, "input")
        self._check_declared(post, "output")

        n_p, n_t = len(self._places), len(self._transitions)
        self._pre = self._to_array(pre, n_p, n_t)
        self._post = self._to_array(post, n_p, n_t)
        self._capacity = self._resolve_capacity(capacity, default_capacity)
        for arr in (self._pre, self._post, self._capacity):
            arr.flags.writeable = False

        LOGGER.debug(
            "Built PetriNet: %d places, %d transitions, %d arcs, capacity=%s",
            n_p,
            n_t,
            len(arcs),
            "default" if not capacity else "explicit",
        )

    @classmethod
    def build(
        cls,
        places: Iterable[Hashable],
        transitions: Iterable[Hashable],
        arcs: Iterable[ArcDescriptor] = (),
        capacity: Optional[Mapping[Hashable, int]] = None,
        *,
        default_capacity: int = DEFAULT_CAPACITY,
    ) -> "PetriNet":
        """Alias of the constructor, mirroring :meth:`ArcDescriptor.pre`/``post``."""
        return cls(
            places,
            transitions,
            arcs,
            capacity,
            default_capacity=default_capacity,
        )

    # ------------------------------------------------------------------
    # construction helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _add_arc(arc: ArcDescriptor, matrix: Matrix) -> None:
        column = matrix.setdefault(arc.transition, {})
        if arc.place in column:
            raise DuplicateArcError(
                f"Duplicate {arc.direction} arc between {arc.place!r} and {arc.transition!r}"
            )
        column[arc.place] = arc.label

    def _check_declared(self, matrix: Matrix, name: str) -> None:
        for t, column in matrix.items():
            if t not in self._transition_index:
                raise UndeclaredEntityError(
                    f"Transition {t!r} of the {name} matrix is not declared"
                )
            for p in column:
                if p not in self._place_index:
                    raise UndeclaredEntityError(
                        f"Place {p!r} of the {name} matrix is not declared"
                    )

    def _to_array(self, matrix: Matrix, n_p: int, n_t: int) -> np.ndarray:
        arr = np.zeros((n_p, n_t), dtype=np.int64)
        for t, column in matrix.items():
            j = self._transition_index[t]
            for p, label in column.items():
                arr[self._place_index[p], j] = label
        return arr

    def _resolve_capacity(
        self, capacity: Optional[Mapping[Hashable, int]], default_capacity: int
    ) -> np.ndarray:
        if not capacity:
            return np.full(len(self._places), int(default_capacity), dtype=np.int64)
        keys = set(capacity)
        declared = set(self._places)
        if keys != declared:
            missing = sorted(declared - keys, key=str)
            extra = sorted(keys - declared, key=str)
            raise CapacityMismatchError(
                f"Capacity keys do not match the places (missing={missing}, extra={extra})"
            )
        values: List[int] = []
        for p in self._places:
            c = capacity[p]
            if isinstance(c, bool) or not isinstance(c, Integral) or c < 0:
                raise CapacityMismatchError(
                    f"Capacity of {p!r} must be a non-negative integer, got {c!r}"
                )
            values.append(int(c))
        return np.asarray(values, dtype=np.int64)

    # ------------------------------------------------------------------
    # query API
    # ------------------------------------------------------------------
    @property
    def places(self) -> Tuple[Hashable, ...]:
        """Declared places, in index order."""
        return self._places

    @property
    def transitions(self) -> Tuple[Hashable, ...]:
        """Declared transitions, in index order."""
        return self._transitions

    @property
    def n_places(self) -> int:
        return len(self._places)

    @property
    def n_transitions(self) -> int:
        return len(self._transitions)

    def _as_matrix(self, arr: np.ndarray) -> Matrix:
        return {
            t: {
                p: int(arr[i, j])
                for i, p in enumerate(self._places)
                if arr[i, j] > 0
            }
            for j, t in enumerate(self._transitions)
        }

    @property
    def input(self) -> Matrix:
        """
        Precondition weights as ``{transition: {place: label}}``.

        Every declared transition is a key; places without an arc are absent
        from its column. The dict is a fresh copy.
        """
        return self._as_matrix(self._pre)

    @property
    def output(self) -> Matrix:
        """Postcondition weights, same layout as :attr:`input`."""
        return self._as_matrix(self._post)

    @property
    def capacity(self) -> Dict[Hashable, int]:
        """Fresh ``place -> capacity`` dict."""
        return {p: int(c) for p, c in zip(self._places, self._capacity)}

    @property
    def pre_matrix(self) -> np.ndarray:
        """Read-only ``(n_places, n_transitions)`` precondition matrix."""
        return self._pre

    @property
    def post_matrix(self) -> np.ndarray:
        """Read-only ``(n_places, n_transitions)`` postcondition matrix."""
        return self._post

    @property
    def capacity_vector(self) -> np.ndarray:
        """Read-only capacity vector in place order."""
        return self._capacity

    def incidence_matrix(self) -> np.ndarray:
        """
        Net effect of each transition, ``post - pre``.

        :returns: New ``(n_places, n_transitions)`` integer matrix.
        :rtype: numpy.ndarray
        """
        return self._post - self._pre

    def place_index(self, place: Hashable) -> int:
        try:
            return self._place_index[place]
        except KeyError:
            raise UndeclaredEntityError(f"Place {place!r} is not declared") from None

    def transition_index(self, transition: Hashable) -> int:
        try:
            return self._transition_index[transition]
        except KeyError:
            raise UndeclaredEntityError(
                f"Transition {transition!r} is not declared"
            ) from None

    # ------------------------------------------------------------------
    # markings
    # ------------------------------------------------------------------
    def marking(self, mapping: Mapping[Hashable, int]) -> Marking:
        """
        Validate a ``place -> tokens`` mapping into a :class:`Marking`.

        :raises MarkingError: See :meth:`Marking.from_mapping`.
        """
        return Marking.from_mapping(self, mapping)

    def coerce_marking(self, marking: MarkingLike) -> Marking:
        """
        Return ``marking`` as a :class:`Marking` of this net.

        Plain mappings are validated; a :class:`Marking` is checked to share
        this net's place order.

        :raises MarkingError: If the marking belongs to another place domain.
        """
        if isinstance(marking, Marking):
            if marking.places != self._places:
                raise MarkingError(
                    f"{marking!r} does not belong to this net's places {self._places}"
                )
            return marking
        return Marking.from_mapping(self, marking)

    # ------------------------------------------------------------------
    # engines
    # ------------------------------------------------------------------
    def fire(self, transition: Hashable, marking: MarkingLike) -> Optional[Marking]:
        """See :func:`petrikit.Net.firing.fire`."""
        return firing.fire(self, transition, marking)

    def is_enabled(self, transition: Hashable, marking: MarkingLike) -> bool:
        """See :func:`petrikit.Net.firing.is_enabled`."""
        return firing.is_enabled(self, transition, marking)

    def enabled_transitions(self, marking: MarkingLike) -> List[Hashable]:
        """See :func:`petrikit.Net.firing.enabled_transitions`."""
        return firing.enabled_transitions(self, marking)

    def successors(self, marking: MarkingLike) -> Set[Marking]:
        """See :func:`petrikit.Net.firing.successors`."""
        return firing.successors(self, marking)

    def revert(self, marking: MarkingLike, transition: Hashable) -> Optional[Marking]:
        """See :func:`petrikit.Net.reverse.revert`."""
        return reverse.revert(self, marking, transition)

    def revert_all(self, marking: MarkingLike) -> Set[Marking]:
        """See :func:`petrikit.Net.reverse.revert_all`."""
        return reverse.revert_all(self, marking)

    def revert_set(self, markings: Iterable[MarkingLike]) -> Set[Marking]:
        """See :func:`petrikit.Net.reverse.revert_set`."""
        return reverse.revert_set(self, markings)

    def minimal_enabling(self, transition: Hashable) -> Marking:
        """See :func:`petrikit.Net.canonical.minimal_enabling`."""
        return canonical.minimal_enabling(self, transition)

    def exact_effect(self, transition: Hashable) -> Marking:
        """See :func:`petrikit.Net.canonical.exact_effect`."""
        return canonical.exact_effect(self, transition)

    def zero(self) -> Marking:
        """See :func:`petrikit.Net.canonical.zero`."""
        return canonical.zero(self)

    # ------------------------------------------------------------------
    # conversion
    # ------------------------------------------------------------------
    def to_bipartite(self, **kwargs: Any) -> nx.DiGraph:
        """See :func:`petrikit.Net.conversion.net_to_bipartite`."""
        from .conversion import net_to_bipartite

        return net_to_bipartite(self, **kwargs)

    @classmethod
    def from_bipartite(cls, G: nx.DiGraph, **kwargs: Any) -> "PetriNet":
        """See :func:`petrikit.Net.conversion.bipartite_to_net`."""
        from .conversion import bipartite_to_net

        return bipartite_to_net(G, **kwargs)

    def __repr__(self) -> str:
        return f"PetriNet(n_places={self.n_places}, n_transitions={self.n_transitions})"
