"""
Time based index naming.

One index per period bounds the size of any single index and lets old
periods be dropped as a whole.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Union


class PartitionGranularity(str, Enum):
    YEAR = "year"
    MONTH = "month"
    DAY = "day"


_SUFFIX_FORMATS = {
    PartitionGranularity.YEAR: "%Y",
    PartitionGranularity.MONTH: "%Y-%m",
    PartitionGranularity.DAY: "%Y-%m-%d",
}

DEFAULT_INDEX_PREFIX = "telemetry"


def partition_name(
    now: datetime,
    prefix: str = DEFAULT_INDEX_PREFIX,
    granularity: Union[PartitionGranularity, str] = PartitionGranularity.YEAR,
) -> str:
    """Return the index a document written at `now` belongs to.

    Naive datetimes are taken as UTC; aware ones are converted to UTC first.
    """
    granularity = PartitionGranularity(granularity)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    suffix = now.astimezone(timezone.utc).strftime(_SUFFIX_FORMATS[granularity])
    return f"{prefix}-{suffix}"
