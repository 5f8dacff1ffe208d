import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


def setup_logging(level_name: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the ``portal`` logger."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logger = logging.getLogger("portal")
    logger.setLevel(level)

    # Startup may run more than once under reload / tests
    if not any(getattr(h, "_portal_handler", False) for h in logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        stream_handler.setLevel(level)
        stream_handler._portal_handler = True
        logger.addHandler(stream_handler)

    logger.info("Logging initialized.")
    return logger
