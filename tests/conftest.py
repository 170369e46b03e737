"""Pytest configuration: Django is set up before any test module imports it."""

import os

import django

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "cafe_discovery.settings_test")
os.environ.setdefault("LOG_FILE_PATH", "./logs/cafe-discovery-test.log")
django.setup()
