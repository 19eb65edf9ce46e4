"""
Test Utilities
==============

Common utilities and helpers for testing.
"""

from .assertions import *
from .mocks import *
from .helpers import *
