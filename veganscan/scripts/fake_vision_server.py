"""
Fake OpenAI-compatible vision server for running the relay without a real model.

Answers POST /v1/chat/completions with a canned verdict after a short delay.
Send an image whose decoded bytes are b"FAIL" to get an HTTP 500 back.

Usage:
    python veganscan/scripts/fake_vision_server.py
    OPENAI_API_KEY=dummy OPENAI_BASE_URL=http://127.0.0.1:9000/v1 \
        uvicorn veganscan.services.api:app --port 8000
"""

import base64
import time
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

app = FastAPI(title="fake-vision-server")

REPLY = "Sim. O rótulo indica certificação vegana e nenhum ingrediente de origem animal."


def _image_url(body: dict) -> str:
    for msg in body.get("messages", []):
        for part in msg.get("content", []):
            if isinstance(part, dict) and part.get("type") == "image_url":
                return part["image_url"]["url"]
    return ""


@app.post("/v1/chat/completions")
async def chat_completions(request: Request):
    body = await request.json()
    url = _image_url(body)
    print(f"[vision] model={body.get('model')} max_tokens={body.get('max_tokens')} image={url[:40]}...")
    time.sleep(0.3)
    if base64.b64decode(url.split(",", 1)[-1] or "", validate=False) == b"FAIL":
        print("[vision] simulating upstream failure")
        return JSONResponse(status_code=500, content={"error": {"message": "simulated failure"}})
    return {
        "id": "chatcmpl-fake",
        "object": "chat.completion",
        "model": body.get("model"),
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": REPLY}, "finish_reason": "stop"}
        ],
    }


if __name__ == "__main__":
    print("Fake vision server starting on http://localhost:9000")
    uvicorn.run(app, host="0.0.0.0", port=9000)
