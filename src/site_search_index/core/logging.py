"""
Logging setup for the service.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the process.

    Repeated calls only adjust the level of the ``search`` logger tree.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    logging.getLogger("search").setLevel(level.upper())
