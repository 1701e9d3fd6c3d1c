#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
The marker and namespace helpers used by the library itself. They are public
because the marker appears in signatures of public functions.
"""

from ._exports import (
    export as export,
    export_dynamic as export_dynamic,
)
from ._markers import (
    DEFAULT as DEFAULT,
    DefaultType as DefaultType,
)
