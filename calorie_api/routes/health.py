from datetime import datetime, timezone

from fastapi import APIRouter

from calorie_api.schemas.analyze_schema import HealthResponse

router = APIRouter(tags=["Health"])

SERVICE_MESSAGE = "Calorie Counter API (Gemini Pro Vision)"


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="OK",
        message=SERVICE_MESSAGE,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
