import secrets

from fastapi import Request
from loguru import logger

from product_admin.domain.errors import AuthError
from product_admin.entrypoints.settings import Config
from product_admin.infrastructure.shopify_client import ShopifyGraphQLClient

ADMIN_KEY_HEADER = "X-Admin-Api-Key"


class AdminAuthenticator:
    """Yields an authorized Shopify client for each inbound request."""

    def __init__(self, config: Config) -> None:
        self._config = config

    def authenticate(self, request: Request) -> ShopifyGraphQLClient:
        """Return a fresh GraphQL client, or raise ``AuthError``.

        The request is rejected when the store has no access token configured
        or, if ``ADMIN_API_KEY`` is set, when the request does not present it.
        """
        if not self._config.SHOPIFY_ACCESS_TOKEN:
            raise AuthError("No Shopify access token configured")

        if expected := self._config.ADMIN_API_KEY:
            presented = request.headers.get(ADMIN_KEY_HEADER, "")
            if not secrets.compare_digest(presented.encode(), expected.encode()):
                logger.warning(f"Rejected {request.method} {request.url.path}: bad admin key")
                raise AuthError("Invalid admin API key")

        return ShopifyGraphQLClient(
            shop_name=self._config.SHOPIFY_SHOP_NAME,
            access_token=self._config.SHOPIFY_ACCESS_TOKEN,
            api_version=self._config.SHOPIFY_API_VERSION,
            timeout=self._config.SHOPIFY_TIMEOUT_SECONDS,
        )
