# -*- coding: utf-8 -*-
"""
HTTP Data Provider for the REST API backend.

Endpoints:
    GET {base_url}/properties              -> {"success": true, "data": [...]}
    GET {base_url}/areas?propertyId=<id>   -> {"success": true, "data": [...], "pagination": {...}}
"""

from typing import Any, Dict, List, Optional

import requests

from models.advertising_area import AdvertisingArea
from models.property import Property
from services.data_provider import DataProviderType, PropertyRepository
from services.exceptions import ApiException, NetworkException
from utils.logger import get_logger

logger = get_logger(__name__)


class HttpPropertyRepository(PropertyRepository):
    """
    Property repository backed by the marketplace REST API.

    Usage:
        repo = HttpPropertyRepository("http://localhost:5000/api", token="...")
        properties = repo.list_properties()
    """

    AREAS_PAGE_SIZE = 100

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.token = token
        self.session = session or requests.Session()

    @property
    def provider_type(self) -> DataProviderType:
        return DataProviderType.HTTP_API

    def set_auth_token(self, token: Optional[str]):
        """Set the bearer token issued by the auth provider."""
        self.token = token

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": "AdSpace-Discovery/1.0"
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, endpoint: str, params: Optional[Dict] = None) -> Any:
        """
        Execute a request and unwrap the backend envelope.

        Raises:
            ApiException: HTTP error status or ``success: false`` envelope
            NetworkException: connection failure or timeout
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"[API REQ] {method} {endpoint} params={params}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                headers=self._headers(),
                timeout=self.timeout
            )
            response.raise_for_status()
            result = response.json() if response.text else None

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except (ValueError, AttributeError):
                pass
            logger.error(f"[API ERR] {status_code} {method} {endpoint} | Response: {response_data}")
            raise ApiException(
                message=str(e),
                status_code=status_code,
                response_data=response_data,
                context=endpoint
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Network error: {endpoint} - {e}")
            raise NetworkException(message=str(e), original_error=e, context=endpoint)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {endpoint} - {e}")
            raise NetworkException(message=str(e), original_error=e, context=endpoint)
        except ValueError as e:
            raise ApiException(message=f"Invalid JSON response: {e}", context=endpoint)

        logger.debug(f"[API RES] {response.status_code} {endpoint}")

        if isinstance(result, dict):
            if not result.get("success", True):
                raise ApiException(
                    message=result.get("message") or result.get("error") or "Unknown error",
                    status_code=response.status_code,
                    response_data=result,
                    context=endpoint
                )
            return result.get("data", [])
        return result if result is not None else []

    def list_properties(self) -> List[Property]:
        items = self._request("GET", "/properties")
        properties = [Property.from_dict(item) for item in items]
        logger.info(f"Fetched {len(properties)} properties from API")
        return properties

    def list_areas(self, property_id: str) -> List[AdvertisingArea]:
        items = self._request(
            "GET", "/areas",
            params={"propertyId": property_id, "limit": self.AREAS_PAGE_SIZE}
        )
        areas = [AdvertisingArea.from_dict(item, property_id=property_id) for item in items]
        logger.info(f"Fetched {len(areas)} advertising areas for property {property_id}")
        return areas
