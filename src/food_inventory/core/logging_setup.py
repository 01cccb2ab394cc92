import logging

from food_inventory.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Setzt Level und Format des Root-Loggers einmalig beim Start."""
    level = logging.DEBUG if settings.debug else settings.log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("food_inventory").setLevel(level)
