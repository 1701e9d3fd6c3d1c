#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import os
import sys

from typing import TYPE_CHECKING, Final

if sys.version_info < (3, 11):
    from exceptiongroup import BaseExceptionGroup

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Sequence
    else:
        from typing import Sequence

_RELEASE_NOTES_ENABLED: Final[bool] = bool(
    os.getenv("SCOPEGUARD_RELEASE_NOTES", "1")
)

# Exceptions do not support weak references, so suppressed failures are
# stored directly on the primary exception object.
_SUPPRESSED_ATTR: Final[str] = "_scopeguard_suppressed"


def get_suppressed(exc: BaseException, /) -> tuple[BaseException, ...]:
    """
    Return the failures that were suppressed in favor of *exc* while
    releasing resources, in the order in which they occurred.

    Example:
        >>> exc = ValueError('body failed')
        >>> get_suppressed(exc)
        ()
        >>> add_suppressed(exc, RuntimeError('release failed'))
        >>> get_suppressed(exc)
        (RuntimeError('release failed'),)
    """

    return tuple(getattr(exc, _SUPPRESSED_ATTR, ()))


def add_suppressed(exc: BaseException, /, *errors: BaseException) -> None:
    """
    Attach *errors* to *exc* as suppressed failures.

    Errors that are *exc* itself or are already attached are skipped, so a
    failure is never reported twice. If enabled, a note naming each attached
    failure is also added to *exc* (Python 3.11+).
    """

    suppressed = exc.__dict__.setdefault(_SUPPRESSED_ATTR, [])

    for error in errors:
        if error is exc or any(error is other for other in suppressed):
            continue

        suppressed.append(error)

        if _RELEASE_NOTES_ENABLED and hasattr(exc, "add_note"):
            exc.add_note(f"suppressed while releasing resources: {error!r}")


def combine_release_errors(errors: Sequence[BaseException], /) -> BaseException:
    """
    Combine failures of releasing resources into one exception to raise.

    A single failure is returned as is. Multiple failures are wrapped in
    :exc:`BaseExceptionGroup`, which becomes :exc:`ExceptionGroup` when all of
    them are instances of :exc:`Exception`.

    Raises:
      ValueError:
        if *errors* is empty.
    """

    if not errors:
        msg = "no errors to combine"
        raise ValueError(msg)

    if len(errors) == 1:
        return errors[0]

    msg = f"failed to release {len(errors)} resources"

    return BaseExceptionGroup(msg, list(errors))
