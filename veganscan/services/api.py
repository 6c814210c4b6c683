import os
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from veganscan.services.models import AnalyzeRequest, AnalyzeResponse, ErrorResponse, StatusResponse
from veganscan.services.status_store import StatusStore
from veganscan.services.relay import Relay, MAX_TOKENS, MAX_RETRIES
from veganscan.orchestrator import errors

load_dotenv(dotenv_path=".env", override=False)

app = FastAPI(title="veganscan relay")

status = StatusStore()

VISION_TIMEOUT_S = float(os.getenv("VISION_TIMEOUT_S", "30"))


def build_vision(status_store, name: str | None = None):
    """Pick the vision adapter from VISION_ADAPTER (openai | claude | mock).

    A configured adapter without credentials falls back to the mock.
    """
    name = (name or os.getenv("VISION_ADAPTER", "openai")).lower()
    if name == "openai":
        from veganscan.adapters.vision.openai_vision import OpenAIVision
        vision = OpenAIVision(status_store, timeout=VISION_TIMEOUT_S)
    elif name == "claude":
        from veganscan.adapters.vision.claude_vision import ClaudeVision
        vision = ClaudeVision(status_store, timeout=VISION_TIMEOUT_S)
    else:
        vision = None

    if vision is None or not vision.ready:
        from veganscan.adapters.vision.mock_vision import MockVision
        status_store.log(f"vision: {name} not ready, falling back to mock")
        vision = MockVision(status_store)
    status_store.log(f"vision adapter: {type(vision).__name__}")
    return vision


vision = build_vision(status)
relay = Relay(
    vision,
    status,
    max_tokens=int(os.getenv("VISION_MAX_TOKENS", str(MAX_TOKENS))),
    retries=int(os.getenv("VISION_RETRIES", str(MAX_RETRIES))),
)


def _error(err: errors.VeganScanError) -> JSONResponse:
    return JSONResponse(status_code=err.http_status, content=ErrorResponse(error=err.message).model_dump())


@app.exception_handler(RequestValidationError)
async def bad_body(request: Request, exc: RequestValidationError):
    # non-object bodies and non-string image fields count as a missing image
    status.log(f"ANALYZE: invalid body on {request.url.path}")
    return _error(errors.MissingInput())


@app.post("/analyze", response_model=AnalyzeResponse,
          responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def analyze(req: AnalyzeRequest):
    try:
        result = relay.analyze(req.image)
    except (errors.RelayError, errors.MediaError) as e:
        status.log(f"ANALYZE: {e.code}")
        return _error(e)
    return AnalyzeResponse(result=result)


@app.get("/status", response_model=StatusResponse)
def get_status():
    return StatusResponse(
        vision_adapter=type(relay.vision).__name__,
        last_error=status.last_error,
        logs=status.logs,
    )


@app.get("/health")
def health():
    vision_name = type(relay.vision).__name__
    checks = {
        "api": True,
        "vision_adapter": vision_name,
        "vision_ready": bool(getattr(relay.vision, "ready", False)),
        "mock": vision_name == "MockVision",
    }
    checks["all_ok"] = checks["api"] and checks["vision_ready"]
    return checks
