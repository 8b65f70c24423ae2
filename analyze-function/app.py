"""
Flask wrapper to run `handler.handler(...)` as a plain HTTP service.

Used for local development against the frontend (same path as the Netlify
function) and for "serverless container" platforms that send plain HTTP.
Every request is translated into a Netlify-style event, so method checks,
body parsing and error mapping all stay in `handler.py`.
"""

from __future__ import annotations

import os
from typing import Callable, Optional

from flask import Flask, Response, request

from handler import handler as default_handler

FUNCTION_PATH = "/.netlify/functions/analyze"
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def _request_to_event() -> dict:
    return {
        "httpMethod": request.method,
        "path": request.path,
        "headers": dict(request.headers),
        "queryStringParameters": request.args.to_dict(),
        "body": request.get_data(as_text=True),
        "isBase64Encoded": False,
    }


def create_app(analyze: Optional[Callable[[dict, object], dict]] = None) -> Flask:
    analyze = analyze or default_handler
    app = Flask(__name__)

    @app.route("/", methods=ALL_METHODS)
    @app.route(FUNCTION_PATH, methods=ALL_METHODS)
    def invoke():
        result = analyze(_request_to_event(), None)
        return Response(
            result.get("body", ""),
            status=int(result.get("statusCode", 200)),
            headers=result.get("headers") or {},
        )

    @app.route("/health", methods=["GET"])
    def health():
        return "OK", 200

    return app


app = create_app()


if __name__ == "__main__":
    from validate_env import validate_env_or_raise

    # Fail fast on local startup (missing key, broken prompt override, etc.)
    validate_env_or_raise()
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8080")))
