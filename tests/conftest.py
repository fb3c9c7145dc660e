"""
Pytest configuration file for the range engine tests.

This file ensures that the parent directory is in the Python path
so that test files can import lazy, combinators, cursors, models and utils.
"""

import sys
from pathlib import Path

# Add the parent directory to the Python path
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import pytest

from helpers import make_source


@pytest.fixture
def values():
    """Reference contents used by most scenarios"""
    return [0, 1, 2, 3, 4]


@pytest.fixture(params=["list", "tuple", "dict", "forward_list"])
def forward_source(request, values):
    """Sources that can be walked at least forward, several times"""
    return make_source(request.param, values)


@pytest.fixture(params=["list", "tuple", "dict"])
def bidirectional_source(request, values):
    """Sources that can be walked backwards"""
    return make_source(request.param, values)
