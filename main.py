"""Command-line smoke entry point for the product catalog.

Usage:
    python main.py list [--tag nature] [--offset 0] [--limit 25]
    python main.py get <product_id>
"""

import argparse
import asyncio
import json

from product_catalog.config import get_config
from product_catalog.logging_setup import configure_logging
from product_catalog.services import create_product_repository


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Query the product catalog")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List products")
    list_parser.add_argument("--tag", default=None, help="Only products with this tag title")
    list_parser.add_argument("--offset", type=int, default=0)
    list_parser.add_argument("--limit", type=int, default=None)

    get_parser = subparsers.add_parser("get", help="Get a product by id")
    get_parser.add_argument("product_id")

    return parser.parse_args()


async def main(args: argparse.Namespace) -> None:
    config = get_config()
    configure_logging(config.logging)

    async with create_product_repository(config) as repository:
        if args.command == "list":
            products = await repository.list(offset=args.offset, limit=args.limit, tag=args.tag)
            print(json.dumps([p.to_document() for p in products], indent=2))
        else:
            product = await repository.get(args.product_id)
            print(json.dumps(product.to_document() if product else None, indent=2))


if __name__ == "__main__":
    asyncio.run(main(_parse_args()))
