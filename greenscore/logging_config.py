"""Logging setup for the green loan scoring service.

Call ``configure_logging()`` once at an entry point. It is idempotent: if the
root logger already has handlers nothing changes.
"""

import logging
import os


def configure_logging(level=None) -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    if level is None:
        level = os.environ.get('LOG_LEVEL', 'INFO').upper()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
