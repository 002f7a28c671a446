# -*- coding: utf-8 -*-
"""
Data Provider Factory.

Centralizes creation of the property repository selected by configuration.
"""

from typing import Optional

from app.config import Config
from .data_provider import DataProviderType, PropertyRepository
from .http_data_provider import HttpPropertyRepository
from .mock_data_provider import InMemoryPropertyRepository
from utils.logger import get_logger

logger = get_logger(__name__)


def create_property_repository(provider: Optional[str] = None) -> PropertyRepository:
    """
    Create the property repository.

    Args:
        provider: "http" or "mock"; defaults to Config.DATA_PROVIDER

    Returns:
        PropertyRepository instance
    """
    provider_str = (provider or Config.DATA_PROVIDER or "http").lower()

    if provider_str in ("mock", DataProviderType.MOCK.value):
        logger.info("Using in-memory property repository")
        return InMemoryPropertyRepository()

    if provider_str not in ("http", "http_api"):
        logger.warning(f"Unknown data provider '{provider_str}', using HTTP")

    logger.info(f"Using HTTP property repository at {Config.API_BASE_URL}")
    return HttpPropertyRepository(
        base_url=Config.API_BASE_URL,
        timeout=Config.API_TIMEOUT,
        token=Config.API_TOKEN
    )
