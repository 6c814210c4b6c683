"""
OpenAI-compatible vision adapter (chat completions with an inlined image).
Requires OPENAI_API_KEY in .env or the environment.

Works against any endpoint speaking the same protocol: set OPENAI_BASE_URL
and OPENAI_MODEL. No SDK needed, uses httpx.
"""
import os
import httpx
from veganscan.adapters.vision.base import VisionAdapter
from veganscan.orchestrator.errors import VisionError
from veganscan.orchestrator.formats import to_data_uri

OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENAI_MODEL    = "gpt-4o"


class OpenAIVision(VisionAdapter):
    def __init__(self, status_store, timeout: float = 30.0, client: httpx.Client | None = None):
        self.status = status_store
        self._api_key  = os.getenv("OPENAI_API_KEY")
        self._base_url = os.getenv("OPENAI_BASE_URL", OPENAI_BASE_URL).rstrip("/")
        self.model     = os.getenv("OPENAI_MODEL", OPENAI_MODEL)
        self.timeout   = timeout
        self._client   = client
        self.ready     = bool(self._api_key)
        if self.ready:
            self.status.log(f"openai_vision: ready (model={self.model})")
        else:
            self.status.log("openai_vision: OPENAI_API_KEY not set")

    def _post(self, url: str, payload: dict, headers: dict) -> httpx.Response:
        if self._client is not None:
            return self._client.post(url, json=payload, headers=headers, timeout=self.timeout)
        return httpx.post(url, json=payload, headers=headers, timeout=self.timeout)

    def describe(self, image, prompt: str, max_tokens: int) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": to_data_uri(image)}},
                    ],
                }
            ],
            "max_tokens": max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = self._post(f"{self._base_url}/chat/completions", payload, headers)
        except httpx.TransportError as e:
            raise VisionError(f"{type(e).__name__}: {e}", transient=True) from e

        if not resp.is_success:
            raise VisionError(f"HTTP {resp.status_code}: {resp.text[:300]}")
        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise VisionError(f"malformed response: {resp.text[:300]}") from e
        if not isinstance(content, str) or not content:
            raise VisionError("response carried no text")
        return content
