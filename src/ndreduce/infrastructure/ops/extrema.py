"""
Single-pass extrema search returning every position of the extremal value.

The search is driven by a caller-supplied *weak* relation ``weak(a, b)``
meaning "``a`` is no better than ``b``" (``operator.le`` finds a maximum,
``operator.ge`` a minimum). Two values are equivalent when the relation
holds in both directions, so the relation does not have to be a strict
total order.

Positions are reported most-recent first: the last index found to attain
the extremum comes first in ``Extremum.positions``. Callers wanting
discovery order reverse the tuple themselves.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from ...domain._array import IArray
from ...domain._errors import EmptySequenceError
from ..array._flat_view import resolve

WeakRelation = Callable[[Any, Any], bool]


@dataclass(frozen=True)
class Extremum:
    """
    Result of an extrema search.

    Attributes
    ----------
    value : Any
        The extremal value, or None for an empty search.
    positions : tuple[int, ...]
        Flat indices attaining ``value``, most recently found first.
    """

    value: Any
    positions: Tuple[int, ...]

    @property
    def is_empty(self) -> bool:
        """True if the search ran over zero elements."""
        return not self.positions


EMPTY_EXTREMUM = Extremum(None, ())


def find_extrema(
    n: int,
    key_fn: Callable[[int], Any],
    weak_relation: WeakRelation,
) -> Extremum:
    """
    Scan indices ``0..n-1`` once and return the extremum and its positions.

    Parameters
    ----------
    n : int
        Number of candidates.
    key_fn : Callable[[int], Any]
        Maps a candidate index to the value being compared.
    weak_relation : Callable[[Any, Any], bool]
        ``weak_relation(a, b)`` is True when ``a`` is no better than ``b``.

    Returns
    -------
    Extremum
        For ``n == 0``, an empty extremum (``value=None``, no positions).

    Notes
    -----
    For every index after the first, with ``best`` the current extremum and
    ``e`` the candidate value:

    - ``weak(best, e)`` and ``weak(e, best)``: a tie, the index is recorded.
    - ``weak(best, e)`` only: ``e`` is strictly better and replaces ``best``;
      earlier ties are discarded.
    - otherwise ``e`` is worse and skipped.
    """
    if n <= 0:
        return EMPTY_EXTREMUM

    best = key_fn(0)
    found = [0]
    for i in range(1, n):
        e = key_fn(i)
        if weak_relation(best, e):
            if weak_relation(e, best):
                found.append(i)
            else:
                best = e
                found = [i]

    found.reverse()
    return Extremum(best, tuple(found))


def array_extrema(
    array: IArray,
    key: Optional[Callable[[Any], Any]] = None,
    weak_relation: WeakRelation = operator.le,
) -> Extremum:
    """
    Extrema over the row-major elements of ``array``.

    Positions are flat row-major indices. ``key`` (if given) is applied to
    every element before comparison; ``Extremum.value`` is the key value.
    """
    fv, n = resolve(array)
    if key is None:
        return find_extrema(n, fv.__getitem__, weak_relation)
    return find_extrema(n, lambda i: key(fv[i]), weak_relation)


def argmax(array: IArray, key: Optional[Callable[[Any], Any]] = None) -> Extremum:
    """Largest value and all its positions."""
    return array_extrema(array, key, operator.le)


def argmin(array: IArray, key: Optional[Callable[[Any], Any]] = None) -> Extremum:
    """Smallest value and all its positions."""
    return array_extrema(array, key, operator.ge)


def max_abs(array: IArray) -> Any:
    """
    Largest absolute value.

    Raises
    ------
    EmptySequenceError
        If ``array`` has no elements.
    """
    result = array_extrema(array, abs, operator.le)
    if result.is_empty:
        raise EmptySequenceError("max_abs")
    return result.value
