"""
Storefront API Client

Read-only access to the catalog and stock endpoints:
- GET /stock/{product_id}    -> {"id": ..., "amount": ...}
- GET /products/{product_id} -> product metadata without quantity

No retries and no caching: every call goes to the service.
"""
from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from storefront import config
from storefront.errors import ApiError, ProductNotFound
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.models import Product, Stock

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class StorefrontApi:
    """Catalog and stock lookups over HTTP."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or config.STOREFRONT_API_URL
        self.timeout = timeout if timeout is not None else config.STOREFRONT_API_TIMEOUT
        self._transport = transport
        self._http_client = client
        self._owns_client = client is None

    def _get_http_client(self) -> httpx.AsyncClient:
        """Lazily create the shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                transport=self._transport,
            )
        return self._http_client

    async def _get(self, path: str, product_id: int, model: Type[ModelT]) -> ModelT:
        client = self._get_http_client()
        try:
            response = await client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise ProductNotFound(product_id) from e
            logger.error(
                "Storefront API error %s on %s", e.response.status_code, path
            )
            raise ApiError(
                f"Storefront API returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error("Storefront API network error on %s: %s", path, e)
            raise ApiError(f"Failed to reach storefront API: {e}") from e

        try:
            data: Any = response.json()
            return model.model_validate(data)
        except (ValueError, ValidationError) as e:
            logger.error(
                "Malformed %s payload for product %s",
                model.__name__,
                sanitize_id_for_logging(product_id),
            )
            raise ApiError(f"Malformed {model.__name__} payload: {e}") from e

    async def get_stock(self, product_id: int) -> Stock:
        """Fetch the live stock record for a product."""
        return await self._get(f"/stock/{product_id}", product_id, Stock)

    async def get_product(self, product_id: int) -> Product:
        """Fetch catalog metadata for a product."""
        return await self._get(f"/products/{product_id}", product_id, Product)

    async def aclose(self) -> None:
        """Close the http client if this instance created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "StorefrontApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
