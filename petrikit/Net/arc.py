from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Hashable

from .exceptions import InvalidArcError

PRE = "pre"
POST = "post"


@dataclass(frozen=True)
class ArcDescriptor:
    """
    Description of a single weighted arc of a Petri net.

    Instances are plain values and should be created through the two named
    constructors :meth:`pre` (place to transition) and :meth:`post`
    (transition to place) rather than directly.

    :param place: Place the arc is connected to.
    :type place: Hashable
    :param transition: Transition the arc is connected to.
    :type transition: Hashable
    :param label: Token multiplicity consumed or produced (positive integer).
    :type label: int
    :param direction: Either ``"pre"`` or ``"post"``.
    :type direction: str
    :raises InvalidArcError: If the label is not a positive integer or the
        direction is unknown.

    .. code-block:: python

        arcs = [
            ArcDescriptor.pre("on", "switchOff"),
            ArcDescriptor.post("switchOff", "off"),
        ]
    """

    place: Hashable
    transition: Hashable
    label: int
    direction: str

    def __post_init__(self) -> None:
        if self.direction not in (PRE, POST):
            raise InvalidArcError(f"Unknown arc direction {self.direction!r}")
        if (
            isinstance(self.label, bool)
            or not isinstance(self.label, Integral)
            or self.label <= 0
        ):
            raise InvalidArcError(
                f"Arc label must be a positive integer, got {self.label!r} "
                f"({self.place!r}, {self.transition!r})"
            )
        object.__setattr__(self, "label", int(self.label))

    @classmethod
    def pre(
        cls, place: Hashable, transition: Hashable, label: int = 1
    ) -> "ArcDescriptor":
        """
        Create a precondition arc from ``place`` to ``transition``.

        :param place: Place the arc comes from.
        :param transition: Transition the arc goes to.
        :param label: Number of tokens consumed by the transition.
        :returns: Arc descriptor with direction ``"pre"``.
        :rtype: ArcDescriptor
        """
        return cls(place=place, transition=transition, label=label, direction=PRE)

    @classmethod
    def post(
        cls, transition: Hashable, place: Hashable, label: int = 1
    ) -> "ArcDescriptor":
        """
        Create a postcondition arc from ``transition`` to ``place``.

        :param transition: Transition the arc comes from.
        :param place: Place the arc goes to.
        :param label: Number of tokens produced by the transition.
        :returns: Arc descriptor with direction ``"post"``.
        :rtype: ArcDescriptor
        """
        return cls(place=place, transition=transition, label=label, direction=POST)

    @property
    def is_pre(self) -> bool:
        """Return ``True`` for precondition arcs."""
        return self.direction == PRE

    def __repr__(self) -> str:
        if self.is_pre:
            return f"pre({self.place!r} -> {self.transition!r}, {self.label})"
        return f"post({self.transition!r} -> {self.place!r}, {self.label})"
