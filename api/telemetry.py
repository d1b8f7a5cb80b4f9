from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from dependencies import TelemetryServiceDep
from entities.telemetry import TelemetryData
from common.responses import create_success_response

router = APIRouter(tags=["Telemetry"])


@router.post("/submit",
    summary="Submit anonymous telemetry",
    description=(
        "Persist the operator version and installed scan types. Unofficial scan types "
        "must be reported as 'other'."
    ),
    response_class=PlainTextResponse,
    responses={
        400: {"description": "Malformed body or invalid scan type"},
        500: {"description": "elasticsearch connection failed"},
    },
)
async def submit_telemetry(
    telemetry_data: TelemetryData,
    telemetry_service: TelemetryServiceDep,
):
    await telemetry_service.ingest(telemetry_data)
    return create_success_response()
