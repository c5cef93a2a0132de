"""Shared fixtures for the FlowParse test suite."""

from datetime import date

import pytest

# A Monday, so weekday arithmetic is easy to follow
MONDAY = date(2024, 1, 15)


@pytest.fixture
def today():
    return MONDAY
