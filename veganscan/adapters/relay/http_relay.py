"""
HTTP client for the analysis relay.

Contract:
  Request:  POST /analyze  {"image": "data:<mime>;base64,<payload>"}
  Response: 200 {"result": "..."}  |  4xx/5xx {"error": "..."}
"""

import httpx
from veganscan.orchestrator import errors
from veganscan.orchestrator.formats import to_data_uri


class HttpRelay:
    def __init__(self, status_store, base_url: str = "http://127.0.0.1:8000", timeout: float = 60.0,
                 client: httpx.Client | None = None):
        self.status = status_store
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)

    def analyze(self, image) -> str:
        url = f"{self.base_url}/analyze"
        self.status.log(f"http_relay: POST /analyze ({image.mime_type}, {len(image.data)}B)")
        try:
            resp = self._client.post(url, json={"image": to_data_uri(image)})
        except httpx.HTTPError as e:
            self.status.log(f"http_relay: {type(e).__name__}: {e}")
            raise errors.AnalysisFailed() from e

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not resp.is_success:
            self.status.log(f"http_relay: HTTP {resp.status_code}")
            raise errors.AnalysisFailed(data.get("error") if isinstance(data, dict) else None)

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, str):
            raise errors.AnalysisFailed()
        self.status.log("http_relay: /analyze done")
        return result

    def health(self) -> dict:
        resp = self._client.get(f"{self.base_url}/health")
        resp.raise_for_status()
        return resp.json()

    def close(self):
        self._client.close()
