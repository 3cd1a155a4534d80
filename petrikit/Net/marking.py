from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
)

import numpy as np

from .exceptions import MarkingError
from .utils import format_counts, index_of

if TYPE_CHECKING:  # pragma: no cover
    from .model import PetriNet


@dataclass(frozen=True, order=True)
class Marking:
    """
    Immutable token-count vector over the places of one net.

    Entries are stored densely in the net's place order, so equality,
    hashing and ordering are entry-wise over ``counts``. Read access by
    place identifier works like a read-only mapping.

    Markings are usually obtained from :meth:`PetriNet.marking` (validated
    client data) or returned by the firing engines; the constructor itself
    performs no capacity check.

    :param counts: Token count per place, in place order.
    :type counts: Tuple[int, ...]
    :param places: Place identifiers, in the same order.
    :type places: Tuple[Hashable, ...]
    """

    counts: Tuple[int, ...]
    places: Tuple[Hashable, ...]
    _index: Optional[Dict[Hashable, int]] = field(
        default=None, compare=False, hash=False, repr=False
    )

    def __post_init__(self) -> None:
        if len(self.counts) != len(self.places):
            raise MarkingError(
                f"Marking has {len(self.counts)} counts for {len(self.places)} places"
            )
        if self._index is None:
            object.__setattr__(self, "_index", index_of(self.places))

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------
    @classmethod
    def from_mapping(cls, net: "PetriNet", mapping: Mapping[Hashable, int]) -> "Marking":
        """
        Build a validated marking of ``net`` from a ``place -> tokens`` mapping.

        :param net: Net the marking belongs to.
        :param mapping: One entry per declared place.
        :returns: New marking.
        :rtype: Marking
        :raises MarkingError: If places are missing or unknown, a count is not
            an integer, or a count lies outside ``[0, capacity]``.
        """
        places = net.places
        missing = [p for p in places if p not in mapping]
        extra = [p for p in mapping if p not in net._place_index]
        if missing or extra:
            raise MarkingError(
                f"Marking places do not match the net (missing={missing}, extra={extra})"
            )
        capacity = net.capacity
        counts: List[int] = []
        for p in places:
            v = mapping[p]
            if isinstance(v, bool) or not isinstance(v, Integral):
                raise MarkingError(f"Token count for {p!r} must be an integer, got {v!r}")
            if not 0 <= v <= capacity[p]:
                raise MarkingError(
                    f"Token count {v} for {p!r} outside [0, {capacity[p]}]"
                )
            counts.append(int(v))
        return cls(tuple(counts), places, net._place_index)

    @classmethod
    def from_counts(cls, net: "PetriNet", counts: Iterable[int]) -> "Marking":
        """Wrap an already computed count vector in the place order of ``net``."""
        return cls(tuple(int(c) for c in counts), net.places, net._place_index)

    # ------------------------------------------------------------------
    # mapping-like access
    # ------------------------------------------------------------------
    def __getitem__(self, place: Hashable) -> int:
        try:
            return self.counts[self._index[place]]
        except KeyError:
            raise KeyError(place) from None

    def get(self, place: Hashable, default: Any = None) -> Any:
        i = self._index.get(place)
        return default if i is None else self.counts[i]

    def __contains__(self, place: object) -> bool:
        return place in self._index

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.places)

    def __len__(self) -> int:
        return len(self.places)

    def keys(self) -> Tuple[Hashable, ...]:
        return self.places

    def values(self) -> Tuple[int, ...]:
        return self.counts

    def items(self) -> Iterator[Tuple[Hashable, int]]:
        return zip(self.places, self.counts)

    def to_dict(self) -> Dict[Hashable, int]:
        """Return a fresh ``place -> tokens`` dict."""
        return dict(zip(self.places, self.counts))

    def as_array(self) -> np.ndarray:
        """Return the counts as a new ``int64`` vector."""
        return np.asarray(self.counts, dtype=np.int64)

    def total(self) -> int:
        """Total number of tokens."""
        return sum(self.counts)

    def __repr__(self) -> str:
        return f"Marking({format_counts(self.to_dict())})"
