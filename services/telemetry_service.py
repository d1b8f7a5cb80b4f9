"""
Telemetry ingestion service.
Validates a submission, stamps it and writes it into the current partition.
"""

import time
from datetime import datetime, timezone
from typing import AbstractSet, Callable, Optional, Union

from config.config import Settings
from entities.telemetry import TelemetryData, TelemetryDataDocument
from repositories.base import BaseDocumentStore
from common.exceptions import StoreUnavailableException
from common.logging import get_logger, log_business_event, log_error, log_performance
from common.validation import validate_scan_types
from policies.scan_types import OFFICIAL_SCAN_TYPES
from services.partitioning import DEFAULT_INDEX_PREFIX, PartitionGranularity, partition_name

logger = get_logger("telemetry_service")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TelemetryService:
    """
    Stateless ingestion pipeline. Safe to share between concurrent requests:
    the allow-list is immutable and the document store handles its own pooling.
    """

    def __init__(
        self,
        document_store: BaseDocumentStore,
        index_prefix: str = DEFAULT_INDEX_PREFIX,
        granularity: Union[PartitionGranularity, str] = PartitionGranularity.YEAR,
        allowed_scan_types: AbstractSet[str] = OFFICIAL_SCAN_TYPES,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.document_store = document_store
        self.index_prefix = index_prefix
        self.granularity = PartitionGranularity(granularity)
        self.allowed_scan_types = allowed_scan_types
        self.clock = clock

    def index_for(self, now: datetime) -> str:
        return partition_name(now, self.index_prefix, self.granularity)

    async def ingest(
        self,
        submission: TelemetryData,
        now: Optional[datetime] = None,
    ) -> TelemetryDataDocument:
        """Persist one submission.

        Raises InvalidScanTypeException before any write if a scan type is not
        official, and StoreUnavailableException if the write fails. Failed
        writes are not retried; the client simply reports again later.
        """
        validate_scan_types(submission.installed_scan_types, self.allowed_scan_types)

        now = now or self.clock()
        document = TelemetryDataDocument.from_submission(submission, now)
        index = self.index_for(now)

        start = time.time()
        try:
            await self.document_store.create(index, document.to_document())
        except Exception as e:
            duration_ms = (time.time() - start) * 1000
            log_performance("telemetry_create", duration_ms, success=False, index=index)
            log_error(e, context={"operation": "telemetry_create", "index": index})
            raise StoreUnavailableException(index=index, cause=e) from e

        duration_ms = (time.time() - start) * 1000
        log_performance("telemetry_create", duration_ms, index=index)
        log_business_event(
            event_type="TELEMETRY_SUBMITTED",
            entity_type="telemetry",
            action="create",
            details={
                "index": index,
                "version": document.version,
                "scan_type_count": len(document.installed_scan_types),
            },
        )
        return document


def create_telemetry_service(
    document_store: BaseDocumentStore,
    settings: Settings,
    clock: Callable[[], datetime] = utc_now,
) -> TelemetryService:
    """Factory function to create TelemetryService from settings."""
    return TelemetryService(
        document_store=document_store,
        index_prefix=settings.telemetry_index_prefix,
        granularity=settings.telemetry_partition_granularity,
        clock=clock,
    )
