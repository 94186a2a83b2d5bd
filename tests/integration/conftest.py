"""
Conftest for integration tests.

Automatically applies the 'integration' marker to all tests in this directory.
"""

import pytest

pytestmark = pytest.mark.integration
