"""cartridge-reader — package metadata and logging setup."""

import logging
from importlib.metadata import version, PackageNotFoundError

from cartridge.infra.config import settings

logger = logging.getLogger("cartridge")

try:
    __version__ = version("cartridge-reader")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"


def configure_logging(level: str | None = None) -> None:
    """Attach a stderr handler to the root logger at the configured level."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("cartridge-reader %s logging configured", __version__)
