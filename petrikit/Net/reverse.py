"""
Reverse firing: predecessor markings for backward reachability.

:func:`revert` is a relaxation of the inverse of :func:`.firing.fire`, not an
exact inverse. Forward firing forgets how many tokens a precondition place
held beyond the weight, so a single representative predecessor is computed
per transition, place by place (``pre``/``post`` are the arc weights of the
transition at that place, ``m`` the reverted marking):

============  ==========================================================
arcs          predecessor value
============  ==========================================================
pre and post  ``pre`` if ``m <= post`` else ``m + pre - post``
pre only      ``m + pre``
post only     ``0`` if ``m <= post`` else ``m - post``
none          ``m``
============  ==========================================================

The revert of a transition fails (``None``) when a place carrying a ``pre``
arc holds more tokens in ``m`` than its capacity. The check is made on ``m``
and not on the predecessor, and places with only a ``post`` arc are never
checked. Predecessors are not clamped to capacity.

:func:`revert_all` and :func:`revert_set` lift this to every transition and
to sets of markings. They are the step function of a backward fixpoint
(``EF``, ``AG``...); the fixpoint loop and its visited set belong to the
caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Hashable, Iterable, Optional, Set, Tuple

import numpy as np

from .marking import Marking

if TYPE_CHECKING:  # pragma: no cover
    from .model import MarkingLike, PetriNet

LOGGER = logging.getLogger(__name__)


def _predecessors(
    net: "PetriNet", m: np.ndarray, columns: slice
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorised predecessor computation for a block of transitions.

    :returns: ``(pred, ok)`` where ``pred`` has one predecessor column per
        selected transition and ``ok`` flags the columns passing the
        capacity guard.
    """
    pre = net.pre_matrix[:, columns]
    post = net.post_matrix[:, columns]
    cap = net.capacity_vector[:, None]
    v = m[:, None]

    has_pre = pre > 0
    has_post = post > 0
    covered = v <= post

    both = np.where(covered, pre, v + pre - post)
    post_only = np.where(covered, 0, v - post)
    pred = np.where(
        has_pre,
        np.where(has_post, both, v + pre),
        np.where(has_post, post_only, v),
    )
    ok = ~np.any(has_pre & (v > cap), axis=0)
    return pred, ok


def revert(
    net: "PetriNet", marking: "MarkingLike", transition: Hashable
) -> Optional[Marking]:
    """
    Compute a predecessor of ``marking`` under ``transition``.

    :param net: Net the marking belongs to.
    :type net: PetriNet
    :param marking: Marking to revert.
    :param transition: Declared transition assumed to have fired last.
    :returns: Representative predecessor, or ``None`` if the capacity guard
        rejects the revert.
    :rtype: Optional[Marking]
    :raises UndeclaredEntityError: If ``transition`` is not declared.

    .. code-block:: python

        net.revert({"on": 0, "off": 1}, "switchOff")  # Marking(on:1, off:0)
    """
    m = net.coerce_marking(marking)
    j = net.transition_index(transition)
    pred, ok = _predecessors(net, m.as_array(), slice(j, j + 1))
    if not ok[0]:
        return None
    return Marking.from_counts(net, pred[:, 0].tolist())


def revert_all(net: "PetriNet", marking: "MarkingLike") -> Set[Marking]:
    """
    Revert ``marking`` under every transition of ``net``.

    Equivalent to ``{revert(net, marking, t) for t in net.transitions}``
    without the ``None`` results; all transitions are processed in one
    vectorised pass.

    :returns: Set of predecessors (duplicates merged).
    :rtype: Set[Marking]
    """
    m = net.coerce_marking(marking)
    if net.n_transitions == 0:
        return set()
    pred, ok = _predecessors(net, m.as_array(), slice(None))
    return {
        Marking.from_counts(net, col)
        for col in pred[:, ok].T.tolist()
    }


def revert_set(net: "PetriNet", markings: Iterable["MarkingLike"]) -> Set[Marking]:
    """
    Union of :func:`revert_all` over ``markings``.

    The result depends only on the set of input markings, not on their
    order. No memoisation is done between calls.

    :param markings: Markings of ``net`` (any iterable).
    :returns: Set of predecessors.
    :rtype: Set[Marking]
    """
    out: Set[Marking] = set()
    n_in = 0
    for m in markings:
        out |= revert_all(net, m)
        n_in += 1
    LOGGER.debug("revert_set: %d markings -> %d predecessors", n_in, len(out))
    return out
