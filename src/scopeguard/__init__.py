#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
Scoped resource management for Python

This package provides one primitive, :class:`ScopeGuard`, that owns the
resources acquired within a scope and guarantees that:

* every registered resource is released exactly once when the scope exits,
  whether normally or because of an exception
* resources are released in reverse order of acquisition
* a failure to release one resource does not prevent releasing the others
* no failure is lost: release failures are attached to the exception of the
  scope, or raised themselves if the scope succeeded
"""

__author__: str = "Ilya Egorov <0x42005e1f@gmail.com>"
__version__: str  # dynamic
__version_tuple__: "tuple[int | str, ...]"  # dynamic

from . import (  # noqa: F401
    meta,
)
from ._decorator import (
    scoped as scoped,
)
from ._errors import (
    add_suppressed as add_suppressed,
    combine_release_errors as combine_release_errors,
    get_suppressed as get_suppressed,
)
from ._guard import (
    BusyScopeError as BusyScopeError,
    ReentryGuard as ReentryGuard,
)
from ._resources import (
    CallbackResource as CallbackResource,
    ClosingResource as ClosingResource,
    ContextResource as ContextResource,
    Resource as Resource,
)
from ._scope import (
    ScopeGuard as ScopeGuard,
    run_scoped as run_scoped,
)

# prepare for external use
meta.export(globals())
meta.export_dynamic(globals(), "__version__", "._version.version")
meta.export_dynamic(globals(), "__version_tuple__", "._version.version_tuple")
