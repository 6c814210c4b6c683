"""
Claude vision adapter.

Sends the product photo to Claude via the Anthropic API.
Requires ANTHROPIC_API_KEY in environment (.env or system env).
The SDK's own retry loop is disabled; the relay owns the retry policy.
"""
import base64
import os
import anthropic
from veganscan.adapters.vision.base import VisionAdapter
from veganscan.orchestrator.errors import VisionError

CLAUDE_MODEL = "claude-haiku-4-5-20251001"


class ClaudeVision(VisionAdapter):
    def __init__(self, status_store, timeout: float = 30.0, client=None):
        self.status = status_store
        self.model = os.getenv("CLAUDE_MODEL", CLAUDE_MODEL)
        self._client = client
        self.ready = client is not None
        if client is None:
            self._init_client(timeout)

    def _init_client(self, timeout: float):
        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            self.status.log("claude_vision: ANTHROPIC_API_KEY not set")
            return
        self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout, max_retries=0)
        self.ready = True
        self.status.log(f"claude_vision: ready ({self.model})")

    def describe(self, image, prompt: str, max_tokens: int) -> str:
        if self._client is None:
            raise VisionError("client not configured")

        b64 = base64.standard_b64encode(image.data).decode("utf-8")
        try:
            message = self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": image.mime_type,
                                    "data": b64,
                                },
                            },
                        ],
                    }
                ],
            )
        except (anthropic.APITimeoutError, anthropic.APIConnectionError) as e:
            raise VisionError(f"{type(e).__name__}: {e}", transient=True) from e
        except anthropic.APIError as e:
            raise VisionError(f"{type(e).__name__}: {e}") from e

        text = "".join(block.text for block in message.content if getattr(block, "type", None) == "text")
        if not text:
            raise VisionError("response carried no text")
        return text
