#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Any, Generic, NoReturn, Protocol, TypeVar

if sys.version_info >= (3, 11):  # runtime introspection support
    from typing import final
else:
    from typing_extensions import final

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

_T = TypeVar("_T")


class Resource(Protocol):
    """
    Anything that can be released: an object with a no-argument
    :meth:`release` method that may fail.

    No base class is required; the protocol is only used for type checking.
    """

    __slots__ = ()

    def release(self, /) -> object: ...


def _type_repr(obj: object, /) -> str:
    cls = obj.__class__

    return f"{cls.__module__}.{cls.__qualname__}"


def check_resource(resource: object, /) -> None:
    """
    Raise :exc:`TypeError` unless *resource* has a callable ``release``
    attribute.
    """

    if not callable(getattr(resource, "release", None)):
        msg = (
            f"{_type_repr(resource)!r} object is not a resource"
            " (it has no release() method)"
        )
        raise TypeError(msg)


class _ResourceAdapter:
    __slots__ = ("__weakref__",)

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)


@final
class CallbackResource(_ResourceAdapter):
    """
    A resource released by calling ``func(*args, **kwargs)``.
    """

    __slots__ = (
        "_args",
        "_func",
        "_kwargs",
    )

    def __init__(
        self,
        func: Callable[..., object],
        /,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        if not callable(func):
            msg = f"{_type_repr(func)!r} object is not callable"
            raise TypeError(msg)

        self._func = func
        self._args = args
        self._kwargs = kwargs

    def __repr__(self, /) -> str:
        arguments = [repr(self._func)]
        arguments.extend(map(repr, self._args))
        arguments.extend(f"{k}={v!r}" for k, v in self._kwargs.items())

        return f"{_type_repr(self)}({', '.join(arguments)})"

    def release(self, /) -> None:
        self._func(*self._args, **self._kwargs)

    @property
    def func(self, /) -> Callable[..., object]:
        return self._func


@final
class ClosingResource(_ResourceAdapter, Generic[_T]):
    """
    A resource released by calling ``thing.close()``: files, sockets, writers
    and other objects that follow the close-when-done convention.
    """

    __slots__ = ("_thing",)

    def __init__(self, thing: _T, /) -> None:
        if not callable(getattr(thing, "close", None)):
            msg = f"{_type_repr(thing)!r} object has no close() method"
            raise TypeError(msg)

        self._thing = thing

    def __repr__(self, /) -> str:
        return f"{_type_repr(self)}({self._thing!r})"

    def release(self, /) -> None:
        self._thing.close()

    @property
    def wrapped(self, /) -> _T:
        return self._thing


@final
class ContextResource(_ResourceAdapter, Generic[_T]):
    """
    A resource released by exiting an already entered context manager.

    The context manager is always exited as if no exception occurred, and
    the return value of ``__exit__()`` is ignored: releasing a resource never
    suppresses failures of the scope.
    """

    __slots__ = (
        "_exit",
        "_manager",
    )

    def __init__(
        self,
        manager: _T,
        exit: Callable[[_T, None, None, None], object],
        /,
    ) -> None:
        self._manager = manager
        self._exit = exit

    def __repr__(self, /) -> str:
        return f"{_type_repr(self)}({self._manager!r})"

    def release(self, /) -> None:
        self._exit(self._manager, None, None, None)

    @property
    def wrapped(self, /) -> _T:
        return self._manager
