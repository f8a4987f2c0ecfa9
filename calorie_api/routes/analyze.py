import logging

from fastapi import APIRouter, Depends, Query, Request

from calorie_api.errors import PayloadTooLargeError
from calorie_api.schemas.analyze_schema import AnalyzeRequest, AnalyzeResponse, ErrorResponse
from calorie_api.services.image_relay import ImageRelay
from calorie_api.services.result_interpreter import interpret as interpret_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analyze"])


def get_relay(request: Request) -> ImageRelay:
    return request.app.state.relay


async def enforce_body_limit(request: Request) -> None:
    # Content-Length is checked by middleware; this catches chunked bodies
    limit = request.app.state.settings.max_body_bytes
    body = await request.body()
    if len(body) > limit:
        logger.warning("Request body too large: %d bytes", len(body))
        raise PayloadTooLargeError("Payload too large")


@router.post("/analyze-image", summary="Estimate calories for a food photo",
             response_model=AnalyzeResponse,
             response_model_exclude_unset=True,
             responses={
                 400: {"model": ErrorResponse, "description": "Missing image or unparsable body"},
                 413: {"model": ErrorResponse, "description": "Body larger than MAX_BODY_BYTES"},
                 500: {"model": ErrorResponse, "description": "Missing credential or Gemini failure"},
             },
             dependencies=[Depends(enforce_body_limit)],
             description="""
Forwards the photo to Gemini together with a fixed nutrition prompt and
returns the provider response untouched under `gemini`.

- `image`: data-URI (`data:image/png;base64,...`) or bare base64 (treated as JPEG)
- `interpret=true`: also return the parsed food items (`result.items`) and the raw
  model text (`result.raw_text`) used when nothing could be parsed
""")
def analyze_image(
    payload: AnalyzeRequest,
    interpret: bool = Query(False, description="Include parsed food items in the response"),
    relay: ImageRelay = Depends(get_relay),
):
    raw = relay.analyze(payload.image)
    if interpret:
        return AnalyzeResponse(gemini=raw, result=interpret_response(raw))
    return AnalyzeResponse(gemini=raw)
