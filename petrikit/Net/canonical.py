from __future__ import annotations

from typing import TYPE_CHECKING, Hashable

from .marking import Marking

if TYPE_CHECKING:  # pragma: no cover
    from .model import PetriNet


def minimal_enabling(net: "PetriNet", transition: Hashable) -> Marking:
    """
    Smallest marking enabling ``transition``: its precondition weight on
    each place, ``0`` elsewhere.

    The result is not checked against capacity.
    """
    j = net.transition_index(transition)
    return Marking.from_counts(net, net.pre_matrix[:, j].tolist())


def exact_effect(net: "PetriNet", transition: Hashable) -> Marking:
    """
    Tokens deposited by ``transition`` into an empty net: its postcondition
    weight on each place, ``0`` elsewhere.
    """
    j = net.transition_index(transition)
    return Marking.from_counts(net, net.post_matrix[:, j].tolist())


def zero(net: "PetriNet") -> Marking:
    """Marking with no token in any place."""
    return Marking.from_counts(net, [0] * net.n_places)
