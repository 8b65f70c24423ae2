from __future__ import annotations

import logging

import httpx

logger = logging.getLogger("analyze-handler.gemini")

# httpx logs every request URL at INFO, and Gemini takes the key as a query param.
logging.getLogger("httpx").setLevel(logging.WARNING)

CONNECT_TIMEOUT_SECONDS = 10.0


class UpstreamError(Exception):
    """Gemini answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        super().__init__(f"Gemini API error: {reason}")
        self.status_code = status_code
        self.reason = reason
        self.body = body


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout, connect=min(CONNECT_TIMEOUT_SECONDS, timeout))
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate_content(self, payload: dict) -> dict:
        """
        POST `payload` to `generateContent` and return the decoded JSON body.

        Raises UpstreamError on a non-2xx answer; transport failures surface as
        httpx exceptions and an undecodable body as ValueError.
        """
        with httpx.Client(
            timeout=self.timeout,
            transport=self.transport,
            follow_redirects=True,
        ) as client:
            resp = client.post(
                self.endpoint,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
            )

        logger.info("Gemini responded with HTTP %s", resp.status_code)
        if not resp.is_success:
            # Body is already read (non-streamed) and decoded with errors="replace".
            logger.error("Gemini API error (HTTP %s): %s", resp.status_code, resp.text)
            # Non-standard status codes have no reason phrase.
            reason = resp.reason_phrase or str(resp.status_code)
            raise UpstreamError(resp.status_code, reason, resp.text)

        return resp.json()
