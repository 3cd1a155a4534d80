from __future__ import annotations


class PetriNetError(RuntimeError):
    """Base class for all Petri net errors."""


class ConstructionError(PetriNetError):
    """Raised when a net description is malformed and cannot be built."""


class DuplicateArcError(ConstructionError):
    """Raised when two arcs of the same direction join one place and transition."""


class UndeclaredEntityError(ConstructionError):
    """Raised when an arc or a query names a place or transition not declared in the net."""


class CapacityMismatchError(ConstructionError):
    """Raised when a capacity map does not cover exactly the declared places."""


class InvalidArcError(ConstructionError):
    """Raised when an arc label is not a positive integer."""


class DomainError(ConstructionError):
    """Raised for duplicate identifiers or overlapping place/transition domains."""


class MarkingError(PetriNetError):
    """Raised when a marking does not fit the net it is used with."""
