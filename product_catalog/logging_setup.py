"""Process-wide logging setup."""

import logging

from product_catalog.config import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger at the configured level.

    Raises:
        ValueError: If the level name is not a standard logging level.
    """
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {config.level}")

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
