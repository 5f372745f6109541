"""Configuration for the budget dashboard.

Values can be overridden with environment variables. The 50/30/10/10
allocation policy lives in ``allocation`` and is not configurable.
"""

import logging
import os
from pathlib import Path
from typing import Optional

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

LOG_LEVEL = os.getenv("BUDGET_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

SEED_PATH = Path(os.getenv("BUDGET_SEED_PATH", _PROJECT_ROOT / "data" / "seed.json"))

CURRENCY_PREFIX = "Rp"


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging once; later calls are no-ops (basicConfig semantics)."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)


def get_seed_path() -> str:
    return str(SEED_PATH)
