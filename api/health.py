from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from common.responses import create_success_response

router = APIRouter(tags=["Health"])


@router.get("/ready",
    summary="Readiness probe",
    description="Returns 'ok' once the process serves requests. Does not touch Elasticsearch.",
    response_class=PlainTextResponse
)
def ready():
    return create_success_response()
