import logging

_CONFIGURED = False


def configure_logging(level="INFO") -> None:
    """Configure root logging once; later calls are no-ops."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _CONFIGURED = True
    logging.getLogger(__name__).info("Logging configured at level %s", logging.getLevelName(level))
