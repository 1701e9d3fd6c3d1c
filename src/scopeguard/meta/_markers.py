#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import enum
import sys

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Final

    if sys.version_info >= (3, 11):
        from typing import Literal
    else:
        from typing_extensions import Literal

if sys.version_info >= (3, 11):  # runtime introspection support
    from typing import final
else:
    from typing_extensions import final

# Markers are enum members so that type checkers treat them as singletons and
# can narrow `value is DEFAULT` checks (PEP 484, "Support for singleton types
# in unions"). Enum classes with members cannot be subclassed, and string
# values keep the members picklable on every supported version.


class _MarkerEnum(enum.Enum):
    def __repr__(self, /) -> str:
        return f"{self.__class__.__module__}.{self._name_}"

    def __str__(self, /) -> str:  # overridden by `enum.Enum`
        return f"{self.__class__.__module__}.{self._name_}"

    def __bool__(self, /) -> Literal[False]:
        return False


@final
class DefaultType(_MarkerEnum):
    """
    A singleton class for :data:`DEFAULT`; mimics :data:`~types.NoneType`.
    """

    DEFAULT = "DEFAULT"


DEFAULT: Final[Literal[DefaultType.DEFAULT]] = DefaultType.DEFAULT
