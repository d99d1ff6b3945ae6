"""
Missing-element marker.

Missing data is represented by a single dedicated object, :data:`MISSING`,
of its own type :class:`Missing`. Unlike ``None``, ``0`` or ``NaN`` it cannot
collide with a legitimate value of any numeric domain, so reductions can
treat it as an identity element without guessing.
"""

from typing import Any


class Missing:
    """
    Singleton type of the missing-element marker.

    Only one instance exists; compare with ``is`` or use :func:`is_missing`.
    """

    __slots__ = ()
    _instance = None

    def __new__(cls) -> "Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (Missing, ())


MISSING = Missing()


def is_missing(value: Any) -> bool:
    """Return True if ``value`` is the missing marker."""
    return value is MISSING
