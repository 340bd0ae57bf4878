import asyncio
import logging
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from inventory_service.core.config import Settings
from inventory_service.core.exceptions import CatalogUnavailableError
from inventory_service.schemas.product import ProductSnapshot
from inventory_service.services.catalog.base import CatalogLookup

logger = logging.getLogger(__name__)


class ProductCatalogClient(CatalogLookup):
    """
    Purpose: Asynchronous client for the product catalog (product-service).

    Functionality:
        - GET /products/{id} with the X-API-KEY header when a key is configured.
        - Connect/read timeouts taken from settings.
        - Bounded retries with growing backoff for timeouts, transport errors and 5xx
          responses. Only this idempotent GET is ever retried.
        - Error decoding: 404 means "no such product" (None); any other non-2xx,
          or an unreadable body, becomes CatalogUnavailableError.
    """

    API_KEY_HEADER = "X-API-KEY"
    BACKOFF_MULTIPLIER = 1.5

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        connect_timeout: float = 2.0,
        read_timeout: float = 3.0,
        retry_period: float = 0.1,
        retry_max_period: float = 1.0,
        max_attempts: int = 3,
    ):
        """
        Initialize the catalog client

        Args:
            base_url: Root URL of the product service (no trailing slash)
            api_key: Value sent in the X-API-KEY header; omitted when empty
            connect_timeout: Seconds allowed to establish a connection
            read_timeout: Seconds allowed waiting for the response
            retry_period: Sleep before the second attempt
            retry_max_period: Upper bound for any single sleep
            max_attempts: Total attempts, including the first one
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = httpx.Timeout(read_timeout, connect=connect_timeout)
        self.retry_period = retry_period
        self.retry_max_period = retry_max_period
        self.max_attempts = max(1, max_attempts)
        logger.info(f"Initializing ProductCatalogClient for {self.base_url}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProductCatalogClient":
        return cls(
            base_url=settings.PRODUCTS_SERVICE_URL,
            api_key=settings.PRODUCTS_API_KEY,
            connect_timeout=settings.PRODUCTS_CONNECT_TIMEOUT,
            read_timeout=settings.PRODUCTS_READ_TIMEOUT,
            retry_period=settings.PRODUCTS_RETRY_PERIOD,
            retry_max_period=settings.PRODUCTS_RETRY_MAX_PERIOD,
            max_attempts=settings.PRODUCTS_RETRY_MAX_ATTEMPTS,
        )

    def _get_headers(self) -> Dict[str, str]:
        """Get headers for API requests"""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers[self.API_KEY_HEADER] = self.api_key
        return headers

    def _backoff(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        delay = self.retry_period * (self.BACKOFF_MULTIPLIER ** (attempt - 1))
        return min(delay, self.retry_max_period)

    async def lookup_product(self, product_id: int) -> Optional[ProductSnapshot]:
        """
        Fetch a product from the catalog.

        Args:
            product_id: Catalog product id

        Returns:
            ProductSnapshot, or None if the catalog answers 404 or an empty body

        Raises:
            CatalogUnavailableError: On timeout/network/5xx after retries, on any
                other non-2xx status, or on a malformed body
        """
        url = f"{self.base_url}/products/{product_id}"
        last_error = "no attempt made"

        for attempt in range(1, self.max_attempts + 1):
            logger.debug(f"GET {url} (attempt {attempt}/{self.max_attempts})")
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(
                        method="GET",
                        url=url,
                        headers=self._get_headers(),
                    )
            except httpx.TimeoutException as e:
                last_error = f"Request timed out: {str(e)}"
                logger.warning(f"Catalog timeout for product {product_id} (attempt {attempt}): {str(e)}")
            except httpx.RequestError as e:
                last_error = f"Network error: {str(e)}"
                logger.warning(f"Catalog network error for product {product_id} (attempt {attempt}): {str(e)}")
            else:
                if response.status_code == 404:
                    logger.info(f"Product {product_id} not found in catalog")
                    return None

                if response.status_code >= 500:
                    last_error = f"Catalog responded {response.status_code}"
                    logger.warning(f"Catalog error {response.status_code} for product {product_id} (attempt {attempt})")
                elif not 200 <= response.status_code < 300:
                    logger.error(f"Catalog rejected request for product {product_id}: {response.status_code} {response.text}")
                    raise CatalogUnavailableError(f"Catalog responded {response.status_code}")
                else:
                    return self._decode(product_id, response)

            if attempt < self.max_attempts:
                await asyncio.sleep(self._backoff(attempt))

        logger.error(f"Catalog lookup for product {product_id} failed after {self.max_attempts} attempts: {last_error}")
        raise CatalogUnavailableError(last_error)

    def _decode(self, product_id: int, response: httpx.Response) -> Optional[ProductSnapshot]:
        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Catalog returned invalid JSON for product {product_id}: {str(e)}")
            raise CatalogUnavailableError("Catalog returned an invalid response") from e

        if payload is None:
            return None

        try:
            return ProductSnapshot.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Catalog payload for product {product_id} did not validate: {str(e)}")
            raise CatalogUnavailableError("Catalog returned an invalid response") from e
