"""Unit tests for cafe_discovery.wsgi module."""

import unittest

from cafe_discovery import wsgi


class TestWsgiModule(unittest.TestCase):
    """Tests for WSGI configuration module."""

    def test_wsgi_application_is_created(self):
        """Test that WSGI application object is created."""
        self.assertTrue(hasattr(wsgi, "application"))
        self.assertIsNotNone(wsgi.application)


if __name__ == "__main__":
    unittest.main()
