"""
Forward firing of transitions.

A transition ``t`` is fired from a marking ``m`` place by place: every
precondition weight is subtracted (the firing fails if ``m`` holds fewer
tokens), every postcondition weight is added (the firing fails if the place
would exceed its capacity). Failures are reported as ``None``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Hashable, List, Optional, Set

import numpy as np

from .marking import Marking

if TYPE_CHECKING:  # pragma: no cover
    from .model import MarkingLike, PetriNet

LOGGER = logging.getLogger(__name__)


def _fire_vector(net: "PetriNet", j: int, m: np.ndarray) -> Optional[np.ndarray]:
    pre = net.pre_matrix[:, j]
    post = net.post_matrix[:, j]
    if np.any(m < pre):
        return None
    new = m - pre + post
    if np.any((post > 0) & (new > net.capacity_vector)):
        return None
    return new


def fire(
    net: "PetriNet", transition: Hashable, marking: "MarkingLike"
) -> Optional[Marking]:
    """
    Fire ``transition`` from ``marking``.

    :param net: Net the marking belongs to.
    :type net: PetriNet
    :param transition: Declared transition to fire.
    :type transition: Hashable
    :param marking: Current marking (a :class:`Marking` or a ``place -> tokens``
        mapping).
    :returns: The resulting marking, or ``None`` if the transition is not
        enabled or a postcondition place would overflow its capacity.
    :rtype: Optional[Marking]
    :raises UndeclaredEntityError: If ``transition`` is not declared.

    .. code-block:: python

        net.fire("switchOff", {"on": 1, "off": 0})  # Marking(on:0, off:1)
        net.fire("switchOn", {"on": 1, "off": 0})   # None
    """
    m = net.coerce_marking(marking)
    j = net.transition_index(transition)
    new = _fire_vector(net, j, m.as_array())
    if new is None:
        return None
    return Marking.from_counts(net, new.tolist())


def is_enabled(net: "PetriNet", transition: Hashable, marking: "MarkingLike") -> bool:
    """
    Check that ``marking`` covers every precondition of ``transition``.

    Capacity is not considered; use :func:`fire` to know whether the firing
    actually succeeds.
    """
    m = net.coerce_marking(marking)
    j = net.transition_index(transition)
    return bool(np.all(m.as_array() >= net.pre_matrix[:, j]))


def enabled_transitions(net: "PetriNet", marking: "MarkingLike") -> List[Hashable]:
    """
    Transitions, in declaration order, that fire successfully from ``marking``.
    """
    m = net.coerce_marking(marking).as_array()
    return [
        t
        for j, t in enumerate(net.transitions)
        if _fire_vector(net, j, m) is not None
    ]


def successors(net: "PetriNet", marking: "MarkingLike") -> Set[Marking]:
    """
    All markings reachable from ``marking`` in one firing.

    :returns: Set of successful :func:`fire` results (duplicates merged).
    :rtype: Set[Marking]
    """
    m = net.coerce_marking(marking).as_array()
    out: Set[Marking] = set()
    for j in range(net.n_transitions):
        new = _fire_vector(net, j, m)
        if new is not None:
            out.add(Marking.from_counts(net, new.tolist()))
    LOGGER.debug("%d successors from %r", len(out), marking)
    return out
