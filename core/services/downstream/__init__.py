"""Downstream service clients package."""

from core.services.downstream.base_downstream_client import BaseDownstreamClient

__all__ = ["BaseDownstreamClient"]
