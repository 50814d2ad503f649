"""Console logging setup for the eventmanager package."""

import logging

PACKAGE = "eventmanager"


class CustomFormatter(logging.Formatter):
    def format(self, record):
        record.levelname = record.levelname.ljust(8)
        return super().format(record)


def configure_logging(log_level: int = logging.INFO) -> logging.Logger:
    """Send the package's log records to the console

    Called by ``eventmanager.main.create_app`` when a level is given; embedding applications
    may call it directly.

    Replaces any handlers previously installed on the ``eventmanager`` logger, so calling
    this more than once does not duplicate output.

    Args:
        log_level (int): The level to log at. logging.[DEBUG | INFO | ERROR | CRITICAL | WARN ].
            Defaults to logging.INFO.

    Returns:
        logging.Logger: The configured package logger.
    """
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(CustomFormatter("%(levelname)s %(name)s: %(message)s"))

    logger = logging.getLogger(PACKAGE)
    logger.handlers.clear()
    logger.addHandler(stream_handler)
    logger.setLevel(log_level)
    return logger
