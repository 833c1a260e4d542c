"""Tests for the package exception hierarchy."""

from __future__ import annotations

import unittest

from relaybus.exceptions import ConfigValidationError, RelayBusError


class ExceptionHierarchyTests(unittest.TestCase):
    """Validate exception inheritance contract."""

    def test_exception_hierarchy(self) -> None:
        self.assertTrue(issubclass(RelayBusError, RuntimeError))
        self.assertTrue(issubclass(ConfigValidationError, RelayBusError))


if __name__ == "__main__":
    unittest.main()
