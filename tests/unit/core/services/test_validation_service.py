"""Tests for ValidationService and the cafe schemas."""

from unittest import TestCase

from core.exceptions import SchemaValidationError
from core.schemas import Cafe, FilterOptions
from core.services.validation_service import validation_service
from tests.factories import cafe_data, make_cafe, rating_data


class TestValidateCafe(TestCase):
    """Test cafe validation."""

    def test_valid_cafe(self):
        """Test valid camelCase data produces a Cafe."""
        cafe = validation_service.validate_cafe(cafe_data())

        self.assertIsInstance(cafe, Cafe)
        self.assertEqual(cafe.work_metrics.wifi_speed, "fast")
        self.assertEqual(cafe.operating_hours["saturday"].is_24_hours, True)
        self.assertIsNone(cafe.operating_hours["sunday"])

    def test_strips_whitespace(self):
        """Test names are stripped."""
        data = cafe_data(name="  Anomali Coffee  ")

        self.assertEqual(validation_service.validate_cafe(data).name, "Anomali Coffee")

    def test_rejects_out_of_range_coordinates(self):
        """Test latitude beyond 90 degrees is rejected."""
        data = cafe_data()
        data["location"]["latitude"] = 91

        with self.assertRaises(SchemaValidationError) as exc_info:
            validation_service.validate_cafe(data)

        self.assertEqual(exc_info.exception.field, "cafe")
        self.assertEqual(
            exc_info.exception.errors[0]["loc"], ("location", "latitude")
        )

    def test_rejects_invalid_uuid(self):
        """Test the id must be a UUID."""
        with self.assertRaises(SchemaValidationError):
            validation_service.validate_cafe(cafe_data(cafe_id="cafe-1"))

    def test_rejects_too_many_images(self):
        """Test more than 10 images are rejected."""
        data = cafe_data()
        data["images"] = data["images"] * 11

        with self.assertRaises(SchemaValidationError):
            validation_service.validate_cafe(data)

    def test_rejects_malformed_opening_time(self):
        """Test opening times must be HH:MM."""
        data = cafe_data()
        data["operatingHours"]["monday"]["open"] = "8am"

        with self.assertRaises(SchemaValidationError):
            validation_service.validate_cafe(data)

    def test_rejects_invalid_image_url(self):
        """Test image URLs are validated."""
        data = cafe_data()
        data["images"][0]["url"] = "not a url"

        with self.assertRaises(SchemaValidationError):
            validation_service.validate_cafe(data)

    def test_revalidates_model_instances(self):
        """Test a mutated instance is validated again."""
        cafe = make_cafe()
        cafe.work_metrics.comfort_rating = 0

        with self.assertRaises(SchemaValidationError):
            validation_service.validate_cafe(cafe)

    def test_safe_validate_cafe(self):
        """Test safe validation returns errors instead of raising."""
        cafe, error = validation_service.safe_validate_cafe(cafe_data())
        self.assertIsNotNone(cafe)
        self.assertIsNone(error)

        cafe, error = validation_service.safe_validate_cafe({"name": "x"})
        self.assertIsNone(cafe)
        self.assertIsInstance(error, SchemaValidationError)

    def test_is_valid_cafe(self):
        """Test the boolean shortcut."""
        self.assertTrue(validation_service.is_valid_cafe(cafe_data()))
        self.assertFalse(validation_service.is_valid_cafe({}))


class TestValidateOtherSchemas(TestCase):
    """Test validation of ratings and sub-objects."""

    def test_valid_rating(self):
        """Test valid rating data produces a CafeRating."""
        rating = validation_service.validate_cafe_rating(rating_data())

        self.assertTrue(rating.love_given)
        self.assertEqual(rating.work_metrics.comfort_rating, 5)

    def test_rating_comment_limit(self):
        """Test comments longer than 280 characters are rejected."""
        with self.assertRaises(SchemaValidationError):
            validation_service.validate_cafe_rating(rating_data(comment="x" * 281))

    def test_rating_photo_limit(self):
        """Test more than 5 photos are rejected."""
        photos = [f"https://images.example.com/{index}.jpg" for index in range(6)]

        with self.assertRaises(SchemaValidationError):
            validation_service.validate_cafe_rating(rating_data(photos=photos))

    def test_validate_location(self):
        """Test location validation."""
        location = validation_service.validate_location(
            {"latitude": "1.5", "longitude": 2, "address": "Jl. A", "city": "Bandung"}
        )

        self.assertEqual(location.latitude, 1.5)
        self.assertIsNone(location.district)

    def test_validate_work_metrics(self):
        """Test noise levels outside the enumeration are rejected."""
        with self.assertRaises(SchemaValidationError) as exc_info:
            validation_service.validate_work_metrics(
                {"wifiSpeed": "fast", "comfortRating": 3, "noiseLevel": "deafening"}
            )

        self.assertEqual(exc_info.exception.field, "workMetrics")

    def test_validate_community_defaults(self):
        """Test love count and verification status have defaults."""
        community = validation_service.validate_community({"contributorId": "abc"})

        self.assertEqual(community.love_count, 0)
        self.assertEqual(community.verification_status, "unverified")

    def test_validate_cafe_image(self):
        """Test image validation keeps the submitted URL string."""
        image = validation_service.validate_cafe_image(
            {
                "url": "https://images.example.com/a.jpg",
                "thumbnailUrl": "https://images.example.com/a_thumb.jpg",
                "uploadedBy": "session-abc",
                "uploadedAt": "2024-01-12T09:15:00Z",
            }
        )

        self.assertEqual(image.url, "https://images.example.com/a.jpg")

    def test_validate_operating_hours(self):
        """Test hours validation accepts closed days."""
        hours = validation_service.validate_operating_hours(
            {"monday": {"open": "7:30", "close": "21:00"}, "sunday": None}
        )

        self.assertEqual(hours["monday"].open, "7:30")
        self.assertIsNone(hours["sunday"])

        with self.assertRaises(SchemaValidationError):
            validation_service.validate_operating_hours(
                {"monday": {"open": "25:00", "close": "21:00"}}
            )

    def test_get_enum_values(self):
        """Test enumerated fields list their allowed values."""
        self.assertEqual(
            validation_service.get_enum_values("workMetrics.wifiSpeed"),
            ["slow", "medium", "fast", "fiber"],
        )
        self.assertIsNone(validation_service.get_enum_values("name"))


class TestFilterOptions(TestCase):
    """Test cafe filtering predicates."""

    def test_empty_filter_matches_everything(self):
        """Test no predicates means every cafe matches."""
        self.assertTrue(FilterOptions().matches(make_cafe()))

    def test_predicates_are_and_combined(self):
        """Test all present predicates must hold."""
        cafe = make_cafe(city="Jakarta", wifi_speed="fast", comfort_rating=4)

        self.assertTrue(
            FilterOptions(city="Jakarta", wifi_speed="fast", min_comfort_rating=4).matches(cafe)
        )
        self.assertFalse(
            FilterOptions(city="Jakarta", min_comfort_rating=5).matches(cafe)
        )
        self.assertFalse(FilterOptions(city="Bandung").matches(cafe))

    def test_amenities_subset_match(self):
        """Test required amenities must all be present, in any order."""
        cafe = make_cafe(amenities=["wifi", "power_outlets", "parking"])

        self.assertTrue(FilterOptions(amenities=["parking", "wifi"]).matches(cafe))
        self.assertFalse(FilterOptions(amenities=["wifi", "pool"]).matches(cafe))

    def test_verification_and_district(self):
        """Test verification status and district are exact matches."""
        cafe = make_cafe(district="Menteng", verification_status="premium")

        self.assertTrue(
            FilterOptions(district="Menteng", verification_status="premium").matches(cafe)
        )
        self.assertFalse(FilterOptions(verification_status="verified").matches(cafe))

    def test_cache_key_is_stable(self):
        """Test equal filters share a cache key and absent fields are left out."""
        self.assertEqual(FilterOptions().cache_key(), "{}")
        self.assertEqual(
            FilterOptions(city="Jakarta").cache_key(),
            validation_service.validate_filter_options({"city": "Jakarta"}).cache_key(),
        )
