"""Package logger."""

from __future__ import annotations

import logging

logger = logging.getLogger("favorite_files")
logger.addHandler(logging.NullHandler())
