"""
State-based method dispatch (a.k.a. "control-path" templating) via decorators.

This module provides a small mechanism for routing a single method call to
one of several registered implementations based on the runtime value of a
named state attribute on the receiving object.

Core idea
---------
- You define a *base* method on a class (its signature becomes the canonical
  one).
- You then register one implementation per state value, each keyed by:
    (ClassName, MethodName, StateVal)
- At runtime, the installed wrapper reads the state attribute of ``self``
  and calls the matching implementation as ``impl(self, *args, **kwargs)``.

In ndreduce the state attribute is the array ``layout``: flat-view
resolution registers one implementation per memory layout.

Important notes
---------------
- The first registration for a method replaces the method on the class with
  a dispatching wrapper (metadata preserved via ``functools.wraps``).
- Registered implementations live in a mapping owned by the builder returned
  from :func:`create_path_builder`. Different builders do not share mappings.
"""

from typing import (
    Callable,
    Hashable,
    Optional,
    Union,
    Dict,
    Type,
    Any,
)
from typing_extensions import ParamSpec, TypeVar
from collections import namedtuple
from functools import wraps

P = ParamSpec("P")
R = TypeVar("R")

MethodKey = namedtuple(
    "MethodKey",
    [
        "ClassName",
        "MethodName",
        "StateVal",
    ],
)
"""Tuple-like key identifying a control path: (class, method, state)."""

TrapException = Optional[Union[Type[Exception], Callable[..., Any]]]


def create_path_builder(state_attr: str = "_state") -> Callable[
    [Type, Callable[P, R], Hashable, TrapException],
    Callable[[Callable[P, R]], Callable[P, R]],
]:
    """
    Create a "path builder" used to register state-dependent method bodies.

    The returned function (``templator``) is used like this:

        decorator = create_path_builder("layout")

        class MyArray:
            def flat_view(self): ...

        @decorator(MyArray, MyArray.flat_view, Layout.ROW_MAJOR)
        def flat_view_row_major(self): ...

    Calling ``MyArray(...).flat_view()`` then dispatches on ``self.layout``.

    Parameters
    ----------
    state_attr : str, optional
        Name of the attribute (or property) consulted at dispatch time.
        Defaults to ``"_state"``.

    Returns
    -------
    Callable
        ``templator(cls, method, state, trap_exception=None) -> decorator``.
    """

    methods_map: Dict[MethodKey, Callable] = {}

    def templator(
        cls: Type,
        method: Callable[P, R],
        state: Hashable,
        trap_exception: TrapException = None,
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """
        Build a decorator that registers a control path implementation.

        Parameters
        ----------
        cls : Type
            Class whose method is replaced by the dispatching wrapper.
        method : Callable[P, R]
            The base method being templated.
        state : Hashable
            State value selecting the decorated implementation.
        trap_exception : Optional
            What to do when no implementation matches the runtime state:

            - ``None``: raise ``NotImplementedError``.
            - an exception class: raise ``trap_exception()``.
            - any other callable: call ``trap_exception(method, state)`` for
              its side effects, then raise ``trap_exception()``.

        Raises
        ------
        TypeError
            If ``state`` is not hashable.
        """
        try:
            hash(state)
        except TypeError:
            raise TypeError(
                f"The argument for 'state' must be hashable. Got {repr(state)}"
            )

        smk = MethodKey(cls.__name__, method.__name__, state)

        def decorator(sub_method: Callable[P, R]) -> Callable[P, R]:
            methods_map[smk] = sub_method

            @wraps(method)
            def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                if not hasattr(self, state_attr):
                    raise NotImplementedError(
                        "{} is missing attribute {} (@property)".format(
                            type(self), repr(state_attr)
                        )
                    )
                cur_state = getattr(self, state_attr)
                sm = methods_map.get(
                    MethodKey(cls.__name__, method.__name__, cur_state)
                )
                if sm is not None:
                    return sm(self, *args, **kwargs)
                if not trap_exception:
                    raise NotImplementedError(
                        "Missing control path (state={}) for {}".format(
                            repr(cur_state), repr(method)
                        )
                    )
                if callable(trap_exception) and not (
                    isinstance(trap_exception, type)
                    and issubclass(trap_exception, BaseException)
                ):
                    trap_exception(method, cur_state)
                raise trap_exception()

            setattr(cls, method.__name__, wrapper)
            return sub_method

        return decorator

    return templator
