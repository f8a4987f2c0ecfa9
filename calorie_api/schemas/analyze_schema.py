from typing import Any, List, Optional
from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    # data-URI ("data:image/png;base64,....") or bare base64
    image: Optional[str] = None


class FoodItem(BaseModel):
    food: str
    estimated_calories: Optional[float] = Field(None, allow_inf_nan=False)
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0, allow_inf_nan=False)


class InterpretedResult(BaseModel):
    items: List[FoodItem] = []
    raw_text: str = ""

    @property
    def parsed(self) -> bool:
        return bool(self.items)


class AnalyzeResponse(BaseModel):
    gemini: Any
    result: Optional[InterpretedResult] = None


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: str
