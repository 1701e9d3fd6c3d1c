#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import copy
import pickle

import pytest

import scopeguard.meta


class _TestMarker:
    def test_base(self, /):
        assert type(self.value)(self.name) is self.value  # singleton
        assert repr(self.value) == f"scopeguard.meta.{self.name}"
        assert str(self.value) == f"scopeguard.meta.{self.name}"
        assert not self.value

    def test_copying(self, /):
        assert copy.copy(self.value) is self.value
        assert copy.deepcopy(self.value) is self.value

    def test_pickling(self, /):
        assert pickle.loads(pickle.dumps(self.value)) is self.value

    def test_inheritance(self, /):
        with pytest.raises(TypeError):

            class MarkerType(type(self.value)):
                pass


class TestDefault(_TestMarker):
    name = "DEFAULT"
    value = scopeguard.meta.DEFAULT

