"""
Public API for :mod:`petrikit.Net`.

Re-exported classes
-------------------
- :class:`~petrikit.Net.arc.ArcDescriptor`
- :class:`~petrikit.Net.model.PetriNet`
- :class:`~petrikit.Net.marking.Marking`

Engine functions (also available as :class:`PetriNet` methods)
--------------------------------------------------------------
- forward: :func:`fire`, :func:`is_enabled`, :func:`enabled_transitions`, :func:`successors`
- backward: :func:`revert`, :func:`revert_all`, :func:`revert_set`
- canonical markings: :func:`minimal_enabling`, :func:`exact_effect`, :func:`zero`
"""

from __future__ import annotations
from typing import List

from .arc import ArcDescriptor
from .marking import Marking
from .model import DEFAULT_CAPACITY, PetriNet
from .firing import enabled_transitions, fire, is_enabled, successors
from .reverse import revert, revert_all, revert_set
from .canonical import exact_effect, minimal_enabling, zero
from .conversion import bipartite_to_net, net_to_bipartite
from .exceptions import (
    CapacityMismatchError,
    ConstructionError,
    DomainError,
    DuplicateArcError,
    InvalidArcError,
    MarkingError,
    PetriNetError,
    UndeclaredEntityError,
)

__all__: List[str] = [
    "ArcDescriptor",
    "Marking",
    "PetriNet",
    "DEFAULT_CAPACITY",
    "fire",
    "is_enabled",
    "enabled_transitions",
    "successors",
    "revert",
    "revert_all",
    "revert_set",
    "minimal_enabling",
    "exact_effect",
    "zero",
    "net_to_bipartite",
    "bipartite_to_net",
    "PetriNetError",
    "ConstructionError",
    "DuplicateArcError",
    "UndeclaredEntityError",
    "CapacityMismatchError",
    "InvalidArcError",
    "DomainError",
    "MarkingError",
]
