"""
Telemetry entity models for the domain layer.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field


class TelemetryData(BaseModel):
    """Submission sent by the telemetry client of an operator installation."""
    version: str = Field(..., min_length=1, description="Operator version, e.g. 'v2.0.42'")
    installed_scan_types: List[str] = Field(
        ...,
        alias="installedScanTypes",
        description="Installed scan types; unofficial ones reported as 'other'",
    )


class TelemetryDataDocument(BaseModel):
    """TelemetryData plus the fields Elasticsearch needs."""
    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime = Field(..., alias="@timestamp")
    version: str
    installed_scan_types: List[str] = Field(..., alias="installedScanTypes")

    @classmethod
    def from_submission(cls, data: TelemetryData, now: datetime) -> "TelemetryDataDocument":
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return cls(
            timestamp=now.astimezone(timezone.utc),
            version=data.version,
            installed_scan_types=list(data.installed_scan_types),
        )

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready body with an RFC3339 '@timestamp'."""
        return self.model_dump(by_alias=True, mode="json")
