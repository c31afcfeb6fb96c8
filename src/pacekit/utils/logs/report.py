"""Logger factory.

Every module does::

    from pacekit.utils.logs import report
    logger = report.settings(__file__)

which returns ``logging.getLogger("pacekit.<module stem>")`` with a single
stderr handler attached to the ``pacekit`` parent logger. Level comes from
``PACEKIT_LOG_LEVEL``; when ``PACEKIT_LOG_DIR`` is set, records are also
appended to ``<dir>/<module stem>.log``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
ROOT_LOGGER = "pacekit"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(FORMAT))
        root.addHandler(handler)
    level = os.environ.get("PACEKIT_LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level, logging.INFO))
    return root


def settings(file: str) -> logging.Logger:
    """Return the module logger for *file* (pass ``__file__``)."""
    _configure_root()
    stem = Path(file).stem
    logger = logging.getLogger(f"{ROOT_LOGGER}.{stem}")

    log_dir = os.environ.get("PACEKIT_LOG_DIR")
    if log_dir and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path / f"{stem}.log", encoding="utf-8")
        fh.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(fh)
    return logger
