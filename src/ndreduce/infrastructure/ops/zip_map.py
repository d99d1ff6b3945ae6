"""
N-ary positional zip-map over equal-length flat sequences.

`zip_map` calls a combining function with the i-th element of every input
and stores the result at index i of the output. The output is chosen
explicitly:

- ``NewBuffer(element_type)``: a fresh owned rank-1 `Array`.
- ``WriteInto(index)``: the results overwrite input ``index`` in place and
  that input is returned.

Index ``i`` of a ``WriteInto`` target is written only after every input has
been read at index ``i``. An elementwise function never reads another
index, so writing into one of its own inputs is safe.

`vectorize` is sugar over `zip_map` for functions whose parameters name the
operands.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, List, Optional, Sequence, Union

import numpy as np

from ...domain._array import IArray
from ...domain._element_type import DEFAULT_RESULT_TYPE, ElementType
from ...domain._errors import LengthMismatchError, ShapeMismatchError
from ..array._array import Array
from ..array._flat_view import FlatView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewBuffer:
    """Write results into a freshly allocated rank-1 array."""

    element_type: ElementType = DEFAULT_RESULT_TYPE


@dataclass(frozen=True)
class WriteInto:
    """
    Write results back into the input at position ``index``.

    Integer targets (INT64 arrays, integer ndarrays) only accept integral
    results; a fractional float raises ``TypeError`` instead of being
    truncated.
    """

    index: int


OutputTarget = Union[NewBuffer, WriteInto]


def _is_integer_target(target: Any) -> bool:
    buffer = target.buffer if isinstance(target, FlatView) else target
    return isinstance(buffer, np.ndarray) and buffer.dtype.kind in "iu"


def _as_flat(seq: Any) -> Any:
    """Return an indexable, length-aware handle over a rank-1 input."""
    if isinstance(seq, IArray):
        if seq.ndim != 1:
            raise ShapeMismatchError(
                seq.shape, (seq.numel(),), "zip_map inputs must be rank-1"
            )
        return seq.flat_view()
    if isinstance(seq, np.ndarray) and seq.ndim != 1:
        raise ShapeMismatchError(
            seq.shape, (seq.size,), "zip_map inputs must be rank-1"
        )
    if not (hasattr(seq, "__len__") and hasattr(seq, "__getitem__")):
        raise TypeError(f"zip_map input is not an indexable sequence: {type(seq)!r}")
    return seq


def zip_map(
    sequences: Sequence[Any],
    fn: Callable[..., Any],
    output: Optional[OutputTarget] = None,
) -> Any:
    """
    Apply ``fn`` positionally across equal-length rank-1 sequences.

    Parameters
    ----------
    sequences : Sequence
        Inputs: rank-1 `Array`s, mutable Python sequences or 1-D ndarrays.
    fn : Callable[..., Any]
        Called as ``fn(s0[i], s1[i], ...)`` for every index ``i``.
    output : Optional[NewBuffer | WriteInto]
        Output selector. Defaults to ``NewBuffer()`` (``FLOAT64``).

    Returns
    -------
    Array or the target input
        The new array, or the input selected by ``WriteInto`` (mutated).

    Raises
    ------
    ShapeMismatchError
        If an input array is not rank-1.
    LengthMismatchError
        If the inputs differ in length.
    IndexError
        If ``WriteInto.index`` does not name an input.
    TypeError
        If a fractional float result is written into an integer output.
    """
    seqs: List[Any] = list(sequences)
    if not seqs:
        raise ValueError("zip_map requires at least one input sequence")

    handles = [_as_flat(s) for s in seqs]
    lengths = [len(h) for h in handles]
    if any(n != lengths[0] for n in lengths):
        raise LengthMismatchError(lengths)
    n = lengths[0]

    if output is None:
        output = NewBuffer()

    if isinstance(output, WriteInto):
        if not 0 <= output.index < len(seqs):
            raise IndexError(
                f"WriteInto index {output.index} out of range for {len(seqs)} inputs"
            )
        result = seqs[output.index]
        target = handles[output.index]
        logger.debug("zip_map writing %d elements in place into input %d", n, output.index)
    elif isinstance(output, NewBuffer):
        result = Array((n,), output.element_type)
        target = result.flat_view()
    else:
        raise TypeError(f"Unsupported zip_map output selector: {output!r}")

    exact = _is_integer_target(target)
    for i in range(n):
        value = fn(*[h[i] for h in handles])
        if exact and isinstance(value, (float, np.floating)) and not float(value).is_integer():
            raise TypeError(
                f"zip_map result {value!r} at index {i} is not integral; "
                "the output holds integers"
            )
        target[i] = value
    return result


def vectorize(
    fn: Callable[..., Any],
    *,
    into: Optional[str] = None,
    element_type: ElementType = DEFAULT_RESULT_TYPE,
) -> Callable[..., Any]:
    """
    Turn an elementwise function into one over named equal-length vectors.

    The parameters of ``fn`` name the operands; the returned callable takes
    the operands by position or by those names and runs :func:`zip_map`.

    Parameters
    ----------
    fn : Callable[..., Any]
        Elementwise expression, e.g. ``lambda x, y: 2 * x + y``.
    into : Optional[str]
        Name of the operand to overwrite in place. When omitted a new array
        of ``element_type`` is returned.
    element_type : ElementType, optional
        Element type of the new array. Defaults to ``FLOAT64``.

    Omitted operands take the default value of their parameter, which must
    then be a sequence of matching length.

    Example
    -------
        axpy = vectorize(lambda a, x, y: a * x + y, into="y")
        axpy(a=alpha_vec, x=x_vec, y=y_vec)
    """
    sig = inspect.signature(fn)
    names = [
        p.name
        for p in sig.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    if len(names) != len(sig.parameters):
        raise TypeError("vectorize requires a function with plain positional parameters")
    if into is not None and into not in names:
        raise ValueError(f"into={into!r} is not a parameter of {fn!r}; expected one of {names}")

    output: OutputTarget
    if into is None:
        output = NewBuffer(element_type)
    else:
        output = WriteInto(names.index(into))

    @wraps(fn)
    def vectorized(*args: Any, **kwargs: Any) -> Any:
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
        return zip_map([bound.arguments[name] for name in names], fn, output)

    return vectorized
