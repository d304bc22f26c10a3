"""Birdeye API integration."""

from .client import BirdeyeApiError, BirdeyeClient

__all__ = ["BirdeyeApiError", "BirdeyeClient"]
