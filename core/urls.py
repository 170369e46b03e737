"""URL routing configuration for core application."""

from django.urls import path

from .views import (
    CafeBatchView,
    CafeDetailView,
    CafeListView,
    CafeRatingListView,
    RateLimitView,
    RatingCreateView,
)

urlpatterns = [
    # Cafe endpoints (batch must come before cafes/<cafe_id>)
    path("cafes", CafeListView.as_view(), name="cafe-list"),
    path("cafes/batch", CafeBatchView.as_view(), name="cafe-batch"),
    path("cafes/<str:cafe_id>", CafeDetailView.as_view(), name="cafe-detail"),
    path(
        "cafes/<str:cafe_id>/ratings",
        CafeRatingListView.as_view(),
        name="cafe-ratings",
    ),
    # Rating endpoints
    path("ratings", RatingCreateView.as_view(), name="rating-create"),
    # Store status
    path("rate-limit", RateLimitView.as_view(), name="rate-limit"),
]
