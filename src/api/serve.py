# This file is the process entrypoint that runs one service under uvicorn.
# Usage: python -m src.api.serve {users|orders|products} [--host H] [--port P] [--apply-ddl]
# A startup failure to reach the database makes uvicorn exit with a non-zero status.

from __future__ import annotations

import argparse
import logging

import uvicorn

from src.api.api_config import SERVICE_DEFAULTS, get_service_config
from src.api.app import open_database_client
from src.common.ddl import apply_service_ddl
from src.common.logging import configure_logging

LOGGER = logging.getLogger("serve")

APP_FACTORIES: dict[str, str] = {
    "users": "src.users.app:create_app",
    "orders": "src.orders.app:create_app",
    "products": "src.products.app:create_app",
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run one CRUD service")
    parser.add_argument("service", choices=sorted(SERVICE_DEFAULTS))
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument(
        "--apply-ddl",
        action="store_true",
        help="Create the service table if it is missing before serving",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    config = get_service_config(args.service)
    configure_logging(config.log_level)

    if args.apply_ddl:
        client = open_database_client(config)
        try:
            apply_service_ddl(client.engine, args.service)
            LOGGER.info("applied ddl service=%s", args.service)
        finally:
            client.close()

    uvicorn.run(
        APP_FACTORIES[args.service],
        factory=True,
        host=args.host or config.host,
        port=args.port or config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
