"""Shared fixtures and layouts for the test suite."""

from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from hypothesis import settings

from layout import DigitLayout
from store import LayoutStore

# Wide layouts run pure-Python long division digit by digit.
settings.register_profile("default", deadline=None)
settings.load_profile("default")

# A spread of layouts: power-of-two and odd bases, narrow and wide.
BASE_7 = DigitLayout(width=3, count=5, digit_max=6)
BASE_10 = DigitLayout(width=4, count=6, digit_max=9)
BASE_100 = DigitLayout(width=7, count=4, digit_max=99)
UINT32 = DigitLayout(width=8, count=4)
ONE_BIT = DigitLayout(width=1, count=1)


@pytest.fixture
def store() -> LayoutStore:
    return LayoutStore()


@pytest.fixture
def empty_store() -> LayoutStore:
    return LayoutStore(seed={})
