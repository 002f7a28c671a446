# -*- coding: utf-8 -*-
"""
Data Provider Abstraction Layer.

The discovery engine reads properties and advertising areas through the
PropertyRepository interface so the data source can be switched:
- HttpPropertyRepository: REST backend
- InMemoryPropertyRepository: seeded sample data for demos and tests

Implementations raise on failure (ApiException / NetworkException); the
engine turns failures into empty collections plus an error signal.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List

from models.advertising_area import AdvertisingArea
from models.property import Property


class DataProviderType(Enum):
    """Supported data provider types."""
    HTTP_API = "http"          # REST API backend
    MOCK = "mock"              # In-memory sample data


class PropertyRepository(ABC):
    """
    Abstract base class for property data access.
    """

    @property
    @abstractmethod
    def provider_type(self) -> DataProviderType:
        """Return the type of this provider."""
        pass

    @abstractmethod
    def list_properties(self) -> List[Property]:
        """Get the full browsable property collection."""
        pass

    @abstractmethod
    def list_areas(self, property_id: str) -> List[AdvertisingArea]:
        """Get the advertising areas nested under a property."""
        pass
