"""Unit tests for URL routing."""

import unittest

from django.urls import resolve, reverse

from core.views import CafeBatchView, CafeDetailView, CafeListView


class TestUrlRouting(unittest.TestCase):
    """Tests for the API routes."""

    def test_batch_route_is_not_a_cafe_id(self):
        """Test cafes/batch resolves to the batch view."""
        self.assertIs(resolve("/api/v1/cafes/batch").func.view_class, CafeBatchView)

    def test_cafe_routes(self):
        """Test list and detail routes resolve to their views."""
        self.assertIs(resolve("/api/v1/cafes").func.view_class, CafeListView)
        match = resolve("/api/v1/cafes/abc")
        self.assertIs(match.func.view_class, CafeDetailView)
        self.assertEqual(match.kwargs, {"cafe_id": "abc"})

    def test_reverse(self):
        """Test named routes reverse under the API prefix."""
        self.assertEqual(reverse("rate-limit"), "/api/v1/rate-limit")
        self.assertEqual(
            reverse("cafe-ratings", kwargs={"cafe_id": "abc"}),
            "/api/v1/cafes/abc/ratings",
        )


if __name__ == "__main__":
    unittest.main()
