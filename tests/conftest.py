#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

from collections import defaultdict
from functools import partial
from itertools import chain
from pathlib import Path

import pytest


class TrackedResource:
    __slots__ = (
        "error",
        "log",
        "name",
    )

    def __init__(self, name, log, error=None):
        self.name = name
        self.log = log
        self.error = error

    def __repr__(self):
        return f"TrackedResource({self.name!r})"

    def release(self):
        self.log.append(self.name)

        if self.error is not None:
            raise self.error


@pytest.fixture
def released():
    return []


@pytest.fixture
def make_resource(released):
    def _make_resource(name, /, *, error=None):
        return TrackedResource(name, released, error)

    return _make_resource


def pytest_collection_modifyitems(config, items):
    directory = Path(__file__).parent
    ordered_tests = defaultdict(
        partial(defaultdict, list),
        {
            "scopeguard.meta.test_markers": defaultdict(list),
            "scopeguard.meta.test_exports": defaultdict(list),
            "scopeguard.test_errors": defaultdict(list),
            "scopeguard.test_guard": defaultdict(list),
            "scopeguard.test_resources": defaultdict(list),
            "scopeguard.test_scope": defaultdict(list),
            "scopeguard.test_decorator": defaultdict(list),
            "scopeguard.test_package": defaultdict(list),
        },
    )

    for item in items:
        module_name = ".".join(item.path.relative_to(directory).parts)[:-3]
        ordered_tests[module_name][item.obj].append(item)

    items[:] = chain.from_iterable(
        chain.from_iterable(mapping.values())
        for mapping in ordered_tests.values()
    )
