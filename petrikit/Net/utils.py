from __future__ import annotations

from typing import Dict, Hashable, Iterable, Mapping, Tuple

from .exceptions import DomainError


__all__ = [
    "normalize_domain",
    "index_of",
    "format_counts",
]


def normalize_domain(items: Iterable[Hashable], kind: str) -> Tuple[Hashable, ...]:
    """
    Turn a declared place/transition collection into an ordered tuple.

    Sequences keep the caller's order. Unordered collections (``set``,
    ``frozenset``, dict views) are ordered by ``str`` so that index
    assignment is reproducible.

    :param items: Declared identifiers.
    :param kind: ``"place"`` or ``"transition"``, used in error messages.
    :returns: Tuple of distinct identifiers.
    :raises DomainError: If an identifier is declared twice.
    """
    if isinstance(items, (set, frozenset)) or not hasattr(items, "__getitem__"):
        ordered = sorted(items, key=str)
    else:
        ordered = list(items)
    seen = set()
    for x in ordered:
        if x in seen:
            raise DomainError(f"Duplicate {kind} identifier {x!r}")
        seen.add(x)
    return tuple(ordered)


def index_of(domain: Tuple[Hashable, ...]) -> Dict[Hashable, int]:
    """
    Map each identifier to its position in ``domain``.

    :param domain: Ordered identifiers.
    :returns: Dict ``identifier -> index``.
    """
    return {x: i for i, x in enumerate(domain)}


def format_counts(counts: Mapping[Hashable, int]) -> str:
    """
    Human-readable summary of token counts.

    :param counts: Mapping place -> tokens.
    :returns: ``'-'`` if empty, otherwise ``'p1:2, p2:0'`` in mapping order.
    """
    return "-" if not counts else ", ".join(f"{k}:{v}" for k, v in counts.items())
