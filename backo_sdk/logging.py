import logging


def get_logger(name: str):
    """
    Logger used by the SDK clients.

    Shares the `asctime | levelname | name | message` format with the
    application loggers so upstream calls read the same in mixed output.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger
