#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from logging import Logger, getLogger
from typing import TYPE_CHECKING, Any, Final, NoReturn, TypeVar

from ._errors import add_suppressed, combine_release_errors
from ._guard import ReentryGuard
from ._resources import (
    CallbackResource,
    ClosingResource,
    ContextResource,
    check_resource,
)

if TYPE_CHECKING:
    from types import TracebackType

    from ._resources import Resource

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

    if sys.version_info >= (3, 10):
        from typing import Concatenate, ParamSpec
    else:
        from typing_extensions import Concatenate, ParamSpec

    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

    _P = ParamSpec("_P")

_T = TypeVar("_T")
_ResourceT = TypeVar("_ResourceT", bound="Resource")

LOGGER: Final[Logger] = getLogger(__name__)


class ScopeGuard:
    """
    A scope that owns acquired resources and releases them on exit.

    Resources are registered as they are acquired. When the scope exits,
    normally or because of an exception, each of them is released exactly
    once, in reverse order of registration, so that a resource is never
    released before the resources that were acquired after it (and may
    depend on it).

    Releasing never stops at the first failure. If the body of the scope
    failed, its exception is propagated unchanged, and failures of releasing
    are attached to it (see :func:`get_suppressed`). Otherwise, the failure of
    releasing is raised itself, or a :exc:`BaseExceptionGroup` of them if
    several resources failed to release.

    Example:
        >>> with ScopeGuard() as scope:
        ...     first = scope.callback(print, 'released first')
        ...     second = scope.callback(print, 'released second')
        released second
        released first
    """

    __slots__ = (
        "__weakref__",
        "_entering",
        "_releasing",
        "_resources",
    )

    def __new__(cls, /) -> Self:
        self = object.__new__(cls)

        self._entering = ReentryGuard(action="entered")
        self._releasing = ReentryGuard(action="releasing resources")
        self._resources = []

        return self

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        if self._releasing:
            extra = "releasing"
        elif self._entering:
            extra = "active"
        else:
            extra = "inactive"

        extra = f"{extra}, resources={len(self._resources)}"

        return f"<{cls_repr}() at {id(self):#x} [{extra}]>"

    def __len__(self, /) -> int:
        """
        Returns the number of resources that are held.
        """

        return len(self._resources)

    def __bool__(self, /) -> bool:
        """
        Returns :data:`True` if the scope holds at least one resource.

        Example:
            >>> scope = ScopeGuard()
            >>> bool(scope)
            False
            >>> _ = scope.callback(print, 'released')
            >>> bool(scope)
            True
            >>> scope.close()
            released
            >>> bool(scope)
            False
        """

        return bool(self._resources)

    def __enter__(self, /) -> Self:
        self._entering.__enter__()

        return self

    def __exit__(
        self,
        /,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        try:
            self._finish(exc_value)
        finally:
            if self._entering:
                self._entering.__exit__(None, None, None)

    def _release_all(
        self,
        /,
        primary: BaseException | None,
    ) -> list[BaseException]:
        errors = []

        with self._releasing:
            resources = self._resources

            while resources:
                # removed before the call, so a failed release is never retried
                resource = resources.pop()

                LOGGER.debug("releasing %r", resource)

                try:
                    resource.release()
                except BaseException as exc:  # noqa: BLE001
                    LOGGER.debug(
                        "failed to release %r",
                        resource,
                        exc_info=True,
                    )

                    if exc is not primary and all(
                        exc is not error for error in errors
                    ):
                        errors.append(exc)

        return errors

    def _finish(self, /, primary: BaseException | None) -> None:
        errors = self._release_all(primary)

        if not errors:
            return

        if primary is not None:
            add_suppressed(primary, *errors)

            return

        error = combine_release_errors(errors)

        try:
            raise error
        finally:
            del error, errors  # break reference cycles

    def register(self, resource: _ResourceT, /) -> _ResourceT:
        """
        Add an already acquired *resource* to the scope and return it.

        The resource will be released after all resources registered later.

        Raises:
          TypeError:
            if *resource* has no ``release()`` method.
          BusyScopeError:
            if the scope is releasing its resources.
        """

        self._releasing.check()

        check_resource(resource)

        self._resources.append(resource)

        LOGGER.debug("registered %r", resource)

        return resource

    def acquire(
        self,
        factory: Callable[_P, _ResourceT],
        /,
        *args: _P.args,
        **kwargs: _P.kwargs,
    ) -> _ResourceT:
        """
        Call ``factory(*args, **kwargs)`` and register the result.

        If the factory raises, nothing is registered and the exception
        propagates; within a :keyword:`with` block or :meth:`run_scoped`,
        the resources registered so far are then released as usual.
        """

        self._releasing.check()

        return self.register(factory(*args, **kwargs))

    def enter(self, manager: Any, /) -> Any:
        """
        Enter the context manager *manager* and register its exit.

        Returns the result of ``manager.__enter__()``. If the latter raises,
        nothing is registered.

        Raises:
          TypeError:
            if *manager* does not support the context manager protocol.
        """

        cls = type(manager)

        try:
            enter = cls.__enter__
            exit = cls.__exit__
        except AttributeError:
            cls_repr = f"{cls.__module__}.{cls.__qualname__}"

            msg = (
                f"{cls_repr!r} object does not support"
                " the context manager protocol"
            )
            raise TypeError(msg) from None

        self._releasing.check()

        value = enter(manager)

        self.register(ContextResource(manager, exit))

        return value

    def closing(self, thing: _T, /) -> _T:
        """
        Register *thing* to be released by calling its ``close()`` method,
        and return it.

        Example:
            >>> import io
            >>> with ScopeGuard() as scope:
            ...     buffer = scope.closing(io.StringIO())
            ...     _ = buffer.write('Hello World')
            >>> buffer.closed
            True
        """

        self.register(ClosingResource(thing))

        return thing

    def callback(
        self,
        func: Callable[_P, object],
        /,
        *args: _P.args,
        **kwargs: _P.kwargs,
    ) -> Callable[_P, object]:
        """
        Register ``func(*args, **kwargs)`` to be called on release, and return
        *func*.
        """

        self.register(CallbackResource(func, *args, **kwargs))

        return func

    def close(self, /) -> None:
        """
        Release all resources now, as if the scope exited without an
        exception.
        """

        self._finish(None)

    def pop_all(self, /) -> Self:
        """
        Move all resources to a new scope and return it.

        The order of the resources is preserved and this scope is left empty,
        so the caller becomes responsible for releasing them.
        """

        self._releasing.check()

        scope = self.__class__()
        scope._resources, self._resources = self._resources, []

        return scope

    def run_scoped(
        self,
        body: Callable[Concatenate[Self, _P], _T],
        /,
        *args: _P.args,
        **kwargs: _P.kwargs,
    ) -> _T:
        """
        Call ``body(self, *args, **kwargs)`` within the scope.

        All resources registered by *body* (and before it) are released when
        it returns or raises. Returns the result of *body*.

        Example:
            >>> def body(scope):
            ...     scope.callback(print, 'released A')
            ...     scope.callback(print, 'released B')
            ...     return 'done'
            >>> ScopeGuard().run_scoped(body)
            released B
            released A
            'done'
        """

        with self:
            return body(self, *args, **kwargs)

    @property
    def resources(self, /) -> tuple[Resource, ...]:
        """
        The held resources in order of registration.
        """

        return tuple(self._resources)

    @property
    def active(self, /) -> bool:
        """
        Whether the scope is entered.
        """

        return bool(self._entering)


def run_scoped(
    body: Callable[Concatenate[ScopeGuard, _P], _T],
    /,
    *args: _P.args,
    **kwargs: _P.kwargs,
) -> _T:
    """
    Call ``body(scope, *args, **kwargs)`` with a new :class:`ScopeGuard`.

    Equivalent to ``ScopeGuard().run_scoped(body, *args, **kwargs)``.
    """

    return ScopeGuard().run_scoped(body, *args, **kwargs)
