"""Loading the rate table from configuration."""

import json
import logging
from functools import lru_cache
from pathlib import Path

from avd_business_case.config import get_settings
from avd_business_case.rates.models import RateTable

logger = logging.getLogger(__name__)


def load_rate_table(path: Path | str) -> RateTable:
    """
    Load a rate table override document.

    Args:
        path: JSON file with one or more rate table sections

    Returns:
        Rate table with the file's sections applied over the defaults
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Rate table file must contain a JSON object: {path}")

    table = RateTable.from_dict(data)
    logger.info("Loaded rate table %s from %s", table.version, path)
    return table


@lru_cache
def get_rate_table() -> RateTable:
    """Get the process-wide rate table (configured override or defaults)."""
    settings = get_settings()
    path = settings.rate_table_file
    if path is None:
        return RateTable()
    return load_rate_table(path)
