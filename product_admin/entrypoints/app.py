from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from loguru import logger

from product_admin.application.html_pages import (
    render_new_product_page,
    render_product_list_page,
)
from product_admin.application.product_listing import ProductListingService
from product_admin.application.product_service import ProductService
from product_admin.application.result_mapper import PRODUCTS_PATH, map_outcome
from product_admin.domain.errors import AuthError
from product_admin.domain.interfaces import IProductGateway
from product_admin.domain.page_state import Redirect
from product_admin.entrypoints.auth import AdminAuthenticator
from product_admin.entrypoints.executor import Executor
from product_admin.entrypoints.settings import Config, get_config
from product_admin.infrastructure.product_gateway import ShopifyProductGateway

NEW_PRODUCT_PATH = "/app/products/new"


def authorize(request: Request) -> None:
    request.app.state.authenticator.authenticate(request)


def get_gateway(request: Request) -> IProductGateway:
    """One authorized gateway per request; nothing is shared between requests."""
    client = request.app.state.authenticator.authenticate(request)
    return ShopifyProductGateway(client)


def _access_denied(request: Request, exc: AuthError) -> HTMLResponse:
    logger.warning(f"Access denied for {request.method} {request.url.path}: {exc}")
    return HTMLResponse("<h1>Access denied</h1>", status_code=403)


def create_app(config: Config | None = None) -> FastAPI:
    config = config or get_config()

    app = FastAPI(title="Shopify product admin")
    app.state.config = config
    app.state.authenticator = AdminAuthenticator(config)
    app.add_exception_handler(AuthError, _access_denied)

    @app.get("/")
    async def index() -> RedirectResponse:
        return RedirectResponse(PRODUCTS_PATH, status_code=303)

    @app.get(PRODUCTS_PATH, response_class=HTMLResponse)
    async def list_products(gateway: IProductGateway = Depends(get_gateway)) -> str:
        service = ProductListingService(
            gateway,
            locale=config.DISPLAY_LOCALE,
            summary_length=config.DESCRIPTION_SUMMARY_LENGTH,
        )
        listing = await service.load(config.PRODUCT_PAGE_SIZE)
        return render_product_list_page(listing)

    @app.get(NEW_PRODUCT_PATH, response_class=HTMLResponse, dependencies=[Depends(authorize)])
    async def new_product_form() -> str:
        return render_new_product_page()

    @app.post(NEW_PRODUCT_PATH, response_model=None)
    async def create_product(
        request: Request, gateway: IProductGateway = Depends(get_gateway)
    ) -> HTMLResponse | RedirectResponse:
        form = await request.form()
        submission = {key: value for key, value in form.items() if isinstance(value, str)}

        executor = Executor(
            ProductService(
                gateway,
                config.catalog_defaults(),
                review_tag=config.REVIEW_TAG,
                location_id=config.SHOPIFY_LOCATION_ID,
            )
        )
        outcome = await executor.run(submission, is_cancelled=request.is_disconnected)

        result = map_outcome(outcome)
        if isinstance(result, Redirect):
            return RedirectResponse(result.location, status_code=303)
        return HTMLResponse(render_new_product_page(result))

    return app
