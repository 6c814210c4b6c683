from pydantic import BaseModel
from typing import Optional

class AnalyzeRequest(BaseModel):
    image: Optional[str] = None  # data URI: data:<mime>;base64,<payload>

class AnalyzeResponse(BaseModel):
    result: str

class ErrorResponse(BaseModel):
    error: str

class StatusResponse(BaseModel):
    vision_adapter: str
    last_error: Optional[str] = None
    logs: list[str]
