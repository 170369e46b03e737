"""Middleware components for the cafe discovery service."""

from core.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
