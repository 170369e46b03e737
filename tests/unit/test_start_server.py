"""Unit tests for start_server module."""

import sys
import unittest
from unittest.mock import patch

import start_server


class TestStartServer(unittest.TestCase):
    """Tests for start_server script."""

    @patch("start_server.run")
    def test_main_configures_and_runs_gunicorn(self, mock_run):
        """Test that main() starts Gunicorn with a single worker."""
        with patch.object(sys, "argv", []), patch.dict("os.environ", {"PORT": "9000"}):
            start_server.main()
            argv = list(sys.argv)

        mock_run.assert_called_once()
        self.assertEqual(argv[1], "cafe_discovery.wsgi:application")
        self.assertIn("0.0.0.0:9000", argv)
        self.assertEqual(argv[argv.index("--workers") + 1], "1")


if __name__ == "__main__":
    unittest.main()
