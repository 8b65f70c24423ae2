"""
Serverless function handler for medical report analysis.

The frontend POSTs a base64 image of a medical report or prescription plus the
language the patient reads. We wrap it in a fixed analysis prompt, forward it to
Gemini `generateContent`, and relay Gemini's JSON back unchanged.

Event shape (Netlify / Lambda proxy integration):
    {"httpMethod": "POST", "body": "<json>", "isBase64Encoded": false}

Request body:
    {"imageData": "<base64>", "imageType": "image/png", "language": "Italiano"}
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import httpx

from gemini import GeminiClient, UpstreamError
from prompt import build_payload, build_prompt
from settings import Settings, load_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("analyze-handler")

REQUIRED_FIELDS = ("imageData", "imageType", "language")


class ErrorKind(str, Enum):
    METHOD_NOT_ALLOWED = "method_not_allowed"
    INVALID_BODY = "invalid_body"
    CONFIGURATION = "configuration"
    INVALID_REQUEST = "invalid_request"
    UPSTREAM = "upstream"
    RUNTIME = "runtime"


STATUS_BY_KIND = {
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.INVALID_BODY: 500,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.UPSTREAM: 500,
    ErrorKind.RUNTIME: 500,
}


class AnalyzeError(Exception):
    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class AnalysisResult:
    payload: Optional[dict] = None
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error_kind is None

    @classmethod
    def ok(cls, payload: dict) -> "AnalysisResult":
        return cls(payload=payload)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "AnalysisResult":
        return cls(error_kind=kind, error=message)


@dataclass(frozen=True)
class AnalysisRequest:
    image_data: str
    image_type: str
    language: str

    @classmethod
    def from_body(cls, body: object) -> "AnalysisRequest":
        """Check field presence and type only; values pass through untouched."""
        if not isinstance(body, dict):
            raise AnalyzeError(ErrorKind.INVALID_REQUEST, "Request body must be a JSON object")
        for field in REQUIRED_FIELDS:
            value = body.get(field)
            if not isinstance(value, str) or not value.strip():
                raise AnalyzeError(ErrorKind.INVALID_REQUEST, f"{field} must be a non-empty string")
        return cls(
            image_data=body["imageData"],
            image_type=body["imageType"],
            language=body["language"],
        )


def parse_event_body(event: dict) -> object:
    """Decode the (optionally base64-encoded) event body and parse it as JSON."""
    raw = event.get("body") or ""
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        return json.loads(raw)
    except ValueError as e:
        raise AnalyzeError(ErrorKind.INVALID_BODY, str(e)) from e


def _error_message(e: Exception) -> str:
    return str(e) or e.__class__.__name__


def to_response(result: AnalysisResult) -> dict:
    if result.success:
        status_code = 200
        body = result.payload
    else:
        status_code = STATUS_BY_KIND[result.error_kind]
        body = {"error": result.error}
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }


class AnalyzeHandler:
    """
    One invocation = one Gemini call.

    `settings_provider` is called on every invocation so configuration is
    never cached between requests; tests inject a fixed `Settings` and an
    `httpx.MockTransport` instead of touching the environment or the network.
    """

    def __init__(
        self,
        settings_provider: Callable[[], Settings] = load_settings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.settings_provider = settings_provider
        self.transport = transport

    def __call__(self, event: dict, context=None) -> dict:
        return to_response(self.analyze(event))

    def analyze(self, event: dict) -> AnalysisResult:
        method = (event.get("httpMethod") or "").upper()
        logger.info(f"Analyze invoked: method={method or '<none>'}")
        if method != "POST":
            return AnalysisResult.failure(ErrorKind.METHOD_NOT_ALLOWED, "Method Not Allowed")

        try:
            return AnalysisResult.ok(self._run(event))
        except AnalyzeError as e:
            logger.warning(f"Request rejected ({e.kind.value}): {e}")
            return AnalysisResult.failure(e.kind, str(e))
        except UpstreamError as e:
            return AnalysisResult.failure(ErrorKind.UPSTREAM, str(e))
        except Exception as e:
            logger.error(f"Analyze handler error: {e!r}")
            return AnalysisResult.failure(ErrorKind.RUNTIME, _error_message(e))

    def _run(self, event: dict) -> dict:
        body = parse_event_body(event)

        try:
            settings = self.settings_provider()
        except ValueError as e:
            raise AnalyzeError(
                ErrorKind.CONFIGURATION, f"GEMINI_TIMEOUT_SECONDS must be a number: {e}"
            ) from e
        if not settings.gemini_api_key:
            raise AnalyzeError(ErrorKind.CONFIGURATION, "GEMINI_API_KEY is not configured")
        if settings.timeout_seconds <= 0:
            raise AnalyzeError(ErrorKind.CONFIGURATION, "GEMINI_TIMEOUT_SECONDS must be positive")

        request = AnalysisRequest.from_body(body)
        prompt = build_prompt(request.language, settings.prompt_template)
        payload = build_payload(prompt, request.image_type, request.image_data)

        logger.info(
            "Forwarding %s image (%d base64 chars) to %s, language=%s",
            request.image_type,
            len(request.image_data),
            settings.gemini_model,
            request.language,
        )
        client = GeminiClient(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.timeout_seconds,
            transport=self.transport,
        )
        return client.generate_content(payload)


_default_handler = AnalyzeHandler()


def handler(event, context):
    """Platform entrypoint (Netlify / Lambda style)."""
    return _default_handler(event, context)


# For local testing
if __name__ == "__main__":
    import sys

    # 1x1 transparent PNG
    test_event = {
        "httpMethod": "POST",
        "body": json.dumps({
            "imageData": "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII=",
            "imageType": "image/png",
            "language": sys.argv[1] if len(sys.argv) > 1 else "Italiano",
        }),
    }
    result = handler(test_event, None)
    print(result)
