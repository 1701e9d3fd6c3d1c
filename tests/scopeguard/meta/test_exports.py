#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import collections

import pytest

import scopeguard

from scopeguard.meta import export, export_dynamic


def _make_namespace():
    class Thing:
        def method(self, /):
            pass

        @property
        def value(self, /):
            return 42

        @classmethod
        def create(cls, /):
            return cls()

    def function():
        pass

    class Foreign:
        pass

    Thing.__module__ = "pkg._things"
    Thing.method.__module__ = "pkg._things"
    Thing.value.fget.__module__ = "pkg._things"
    Thing.__dict__["create"].__func__.__module__ = "pkg._things"
    function.__module__ = "pkg._functions"
    Foreign.__module__ = "other"

    return {
        "__name__": "pkg",
        "CONSTANT": 1,
        "Foreign": Foreign,
        "Thing": Thing,
        "_private": function,
        "function": function,
    }


class TestExport:
    def test_rehoming(self, /):
        namespace = _make_namespace()
        thing = namespace["Thing"]

        export(namespace)

        assert thing.__module__ == "pkg"
        assert thing.__qualname__ == "Thing"
        assert thing.method.__module__ == "pkg"
        assert thing.method.__qualname__ == "Thing.method"
        assert thing.value.fget.__qualname__ == "Thing.value"
        assert thing.create.__func__.__qualname__ == "Thing.create"
        assert namespace["function"].__module__ == "pkg"
        assert namespace["function"].__qualname__ == "function"

    def test_foreign_objects(self, /):
        namespace = _make_namespace()
        foreign = namespace["Foreign"]
        qualname = foreign.__qualname__

        export(namespace)

        assert foreign.__module__ == "other"
        assert foreign.__qualname__ == qualname

    def test_all(self, /):
        namespace = _make_namespace()

        export(namespace)

        assert namespace["__all__"] == ("CONSTANT", "Foreign", "Thing", "function")

    def test_existing_all(self, /):
        namespace = _make_namespace()
        namespace["__all__"] = ("function",)

        export(namespace)

        assert namespace["__all__"] == ("function",)

    def test_package(self, /):
        assert scopeguard.ScopeGuard.__module__ == "scopeguard"
        assert scopeguard.ScopeGuard.register.__module__ == "scopeguard"
        assert scopeguard.BusyScopeError.__module__ == "scopeguard"
        assert scopeguard.meta.DefaultType.__module__ == "scopeguard.meta"
        assert "ScopeGuard" in scopeguard.__all__
        assert "meta" not in scopeguard.__all__
        assert "DEFAULT" in scopeguard.meta.__all__


class TestExportDynamic:
    def test_absolute_target(self, /):
        namespace = {"__name__": "pkg"}

        export_dynamic(namespace, "OrderedDict", "collections.OrderedDict")

        getattr_impl = namespace["__getattr__"]

        assert getattr_impl("OrderedDict") is collections.OrderedDict
        assert namespace["OrderedDict"] is collections.OrderedDict

    def test_relative_target(self, /):
        namespace = {"__name__": "scopeguard", "__package__": "scopeguard"}

        export_dynamic(namespace, "suppressed", "._errors.get_suppressed")

        value = namespace["__getattr__"]("suppressed")

        assert value is scopeguard.get_suppressed

    def test_unknown_name(self, /):
        namespace = {"__name__": "pkg"}

        export_dynamic(namespace, "OrderedDict", "collections.OrderedDict")

        with pytest.raises(AttributeError, match="has no attribute 'other'"):
            namespace["__getattr__"]("other")

    def test_duplicate(self, /):
        namespace = {"__name__": "pkg"}

        export_dynamic(namespace, "OrderedDict", "collections.OrderedDict")

        with pytest.raises(RuntimeError, match="already registered"):
            export_dynamic(namespace, "OrderedDict", "collections.deque")

    def test_foreign_getattr(self, /):
        namespace = {"__name__": "pkg", "__getattr__": lambda name: None}

        with pytest.raises(RuntimeError, match="already defined"):
            export_dynamic(namespace, "deque", "collections.deque")
