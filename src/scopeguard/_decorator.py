#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

from inspect import iscoroutinefunction, isgeneratorfunction

from wrapt import FunctionWrapper

from ._scope import ScopeGuard


def __scoped_wrapper(wrapped, instance, args, kwargs, /):
    # `wrapped` is already bound when the decorated function is a method, so
    # the scope goes right after `self`
    with ScopeGuard() as scope:
        return wrapped(scope, *args, **kwargs)


def scoped(wrapped, /):
    """
    Decorate a function so that each call runs in a new :class:`ScopeGuard`.

    The scope is passed as the first positional argument (after ``self`` for
    methods), and its resources are released when the call returns or
    raises, as with :func:`run_scoped`.

    Example:
        >>> @scoped
        ... def work(scope, name):
        ...     scope.callback(print, f'released {name}')
        ...     return name.upper()
        >>> work('writer')
        released writer
        'WRITER'

    Raises:
      TypeError:
        if *wrapped* is a coroutine function or a generator function, since
        their bodies run after the call returns.
    """

    if iscoroutinefunction(wrapped) or isgeneratorfunction(wrapped):
        msg = f"cannot scope the lazy function {wrapped!r}"
        raise TypeError(msg)

    return FunctionWrapper(wrapped=wrapped, wrapper=__scoped_wrapper)
