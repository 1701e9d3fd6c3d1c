#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, NoReturn

from .meta import DEFAULT, DefaultType

if TYPE_CHECKING:
    from types import TracebackType

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self


class BusyScopeError(RuntimeError):
    """
    Raised when a scope is used in a way that would break the release order:
    entering a scope that is already entered, or changing it while its
    resources are being released.
    """


class ReentryGuard:
    """
    A non-blocking flag that detects overlapping use of a scope.

    While the guard is entered, it is busy, and any attempt to enter it again
    raises :exc:`BusyScopeError` instead of waiting.
    """

    __slots__ = (
        "__weakref__",
        "_action",
        "_free",
    )

    def __new__(
        cls,
        _: DefaultType = DEFAULT,
        /,
        action: str | DefaultType = DEFAULT,
    ) -> Self:
        if _ is not DEFAULT:
            msg = "the first argument should not have been passed"
            raise ValueError(msg)

        if action is DEFAULT:
            action = "in use"

        self = object.__new__(cls)

        self._action = action
        self._free = [None]  # one token; popped while busy

        return self

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        object_repr = f"{cls_repr}({self._action!r})"

        if not self:
            extra = "free"
        else:
            extra = "busy"

        return f"<{object_repr} at {id(self):#x} [{extra}]>"

    def __bool__(self, /) -> bool:
        """
        Returns :data:`True` if the guard is busy.

        Example:
            >>> releasing = ReentryGuard(action='releasing')
            >>> bool(releasing)
            False
            >>> with releasing:
            ...     bool(releasing)
            True
            >>> bool(releasing)
            False
        """

        return not self._free

    def __enter__(self, /) -> Self:
        try:
            self._free.pop()
        except IndexError:
            msg = f"the scope is already {self._action}"
            raise BusyScopeError(msg) from None

        return self

    def __exit__(
        self,
        /,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self._free.append(None)

    def check(self, /) -> None:
        """
        Raise :exc:`BusyScopeError` if the guard is busy.
        """

        if not self._free:
            msg = f"the scope is already {self._action}"
            raise BusyScopeError(msg)

    @property
    def action(self, /) -> str:
        """
        The action the guard protects, used in error messages.
        """

        return self._action
