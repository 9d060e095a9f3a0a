import httpx

from product_admin.domain.errors import TransportFault
from product_admin.shared.decorators import log_errors


class ShopifyGraphQLError(TransportFault):
    """Raised when the Shopify API returns top-level GraphQL errors."""


class ShopifyGraphQLClient:
    """Thin async httpx wrapper for the Shopify Admin GraphQL API.

    Every call is bounded by ``timeout`` seconds. ``transport`` lets tests
    plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        shop_name: str,
        access_token: str,
        api_version: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = (
            f"https://{shop_name}.myshopify.com/admin/api/{api_version}/graphql.json"
        )
        self._headers = {
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        }
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @log_errors
    async def execute(self, query: str, variables: dict | None = None) -> dict:
        """POST a GraphQL operation and return the whole response body.

        Raises:
            ShopifyGraphQLError: if the response contains a top-level ``errors`` key.
            TransportFault: on timeouts, connection errors, non-2xx responses,
                or a body that is not a JSON object.
        """
        payload: dict = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._endpoint, headers=self._headers, json=payload
                )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            raise TransportFault(f"Shopify request failed: {exc}") from exc
        except ValueError as exc:
            raise TransportFault("Shopify returned invalid JSON") from exc

        if not isinstance(body, dict):
            raise TransportFault("Shopify response must be a JSON object")

        if errors := body.get("errors"):
            raise ShopifyGraphQLError(errors)

        return body
