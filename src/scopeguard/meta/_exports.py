#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from importlib import import_module
from importlib.util import resolve_name
from types import FunctionType, ModuleType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):  # PEP 585
        from collections.abc import MutableMapping
    else:
        from typing import MutableMapping

_REGISTRY_NAME = "_scopeguard_meta_dynamic_exports"


def _issubmodule(module_name: str | None, package_name: str, /) -> bool:
    return module_name is not None and (
        module_name == package_name
        or module_name.startswith(f"{package_name}.")
    )


def _export_one(
    package_name: str,
    qualname: str,
    value: object,
    /,
    visited: set[int],
) -> None:
    # Only classes and functions are updated. Other objects (markers, wrapt
    # proxies, constants) either have a read-only `__module__` or forward it to
    # the object they wrap.

    if isinstance(value, type):
        if not _issubmodule(value.__module__, package_name):
            return  # skip foreign ones

        if id(value) in visited:
            return  # the class references itself

        visited.add(id(value))

        # copy the namespace so that it is not changed during iteration
        for attr_name, attr_value in {**vars(value)}.items():
            if not attr_name.startswith("_"):
                _export_one(
                    package_name,
                    f"{qualname}.{attr_name}",
                    attr_value,
                    visited,
                )

        value.__qualname__ = qualname
        value.__module__ = package_name
    elif isinstance(value, FunctionType):
        if not _issubmodule(value.__module__, package_name):
            return  # skip foreign ones

        value.__qualname__ = qualname
        value.__module__ = package_name
    elif isinstance(value, (classmethod, staticmethod)):
        _export_one(package_name, qualname, value.__func__, visited)
    elif isinstance(value, property):
        for func in (value.fget, value.fset, value.fdel):
            if func is not None:
                _export_one(package_name, qualname, func, visited)


def export(
    package_namespace: ModuleType | MutableMapping[str, object],
    /,
) -> None:
    """
    Prepare *package_namespace* for external use.

    Every public member (a name without a leading underscore) that was
    defined in a private submodule of the package is updated to look as if it
    was defined directly in the package, so that reprs, tracebacks and pickles
    refer to ``package.Name`` rather than ``package._module.Name``. Public
    subpackages are processed recursively. Finally, ``__all__`` is set to the
    sorted names of all public non-module members unless it already exists.

    Typically, the usage is ``export(globals())`` near the end of
    ``__init__.py``.
    """

    if TYPE_CHECKING:
        # `sphinx.ext.autodoc` does not support the `__module__` hacks
        return

    if isinstance(package_namespace, ModuleType):
        package_namespace = vars(package_namespace)

    package_name = package_namespace["__name__"]

    public_names = []

    for name, value in {**package_namespace}.items():
        if name.startswith("_"):
            continue  # skip non-public ones

        if isinstance(value, ModuleType):
            if value.__name__.rpartition(".")[0] == package_name:
                export(value)  # a direct public subpackage
        else:
            public_names.append(name)

            _export_one(package_name, name, value, set())

    # constants first, then the rest in alphabetical order
    public_names.sort()
    public_names.sort(key=str.isupper, reverse=True)

    package_namespace.setdefault("__all__", tuple(public_names))


def export_dynamic(
    module_namespace: ModuleType | MutableMapping[str, object],
    link_name: str,
    target: str,
    /,
) -> None:
    """
    Register a lazily imported attribute in *module_namespace*.

    On the first call, defines :meth:`~module.__getattr__` in the namespace.
    When *link_name* is looked up and is not yet defined, *target* (an
    absolute ``package.module.attribute`` path or a relative
    ``.module.attribute`` one) is imported, cached in the namespace and
    returned.

    Used for attributes that only exist after the package has been built,
    such as ``__version__``.

    Raises:
      RuntimeError:
        if *link_name* is already registered or ``__getattr__()`` was defined
        by someone else.
    """

    if isinstance(module_namespace, ModuleType):
        module_namespace = vars(module_namespace)

    module_name = module_namespace["__name__"]
    package_name = module_namespace.get("__package__") or module_name

    getattr_impl = module_namespace.get("__getattr__")

    if getattr_impl is None:
        registry = {}  # {link_name: (target_module_name, target_name)}

        def __getattr__(name: str) -> object:
            try:
                target_module_name, target_name = registry[name]
            except KeyError:
                msg = f"module {module_name!r} has no attribute {name!r}"
                raise AttributeError(msg) from None

            value = getattr(import_module(target_module_name), target_name)

            return module_namespace.setdefault(name, value)

        setattr(__getattr__, _REGISTRY_NAME, registry)

        __getattr__.__module__ = module_name

        getattr_impl = module_namespace.setdefault("__getattr__", __getattr__)

    try:
        registry = getattr(getattr_impl, _REGISTRY_NAME)
    except AttributeError:
        msg = "__getattr__() is already defined"
        raise RuntimeError(msg) from None

    target_module_name, _, target_name = resolve_name(
        target,
        package_name,
    ).rpartition(".")

    record = (target_module_name, target_name)

    if registry.setdefault(link_name, record) is not record:
        msg = f"{link_name!r} is already registered"
        raise RuntimeError(msg)
