import sys

import uvicorn
from loguru import logger

from product_admin.entrypoints.app import create_app
from product_admin.entrypoints.settings import get_config


def main() -> None:
    config = get_config()

    logger.remove()
    logger.add(sys.stderr, level=config.LOG_LEVEL.upper())
    logger.info(
        f"Serving admin panel for {config.SHOPIFY_SHOP_NAME} "
        f"(API {config.SHOPIFY_API_VERSION}) on {config.HOST}:{config.PORT}"
    )

    uvicorn.run(create_app(config), host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
