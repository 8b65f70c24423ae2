"""
Environment validation for the analyze function.

Intent:
- Fail fast with human-readable errors (missing key, bad timeout, broken prompt override).
- Usable both as an import (local Flask startup) and as a script:
  `python validate_env.py` before deploying or when debugging a `.env` file.

The deployed function itself does not call this: a missing key there is reported
per invocation as a 500, so the frontend gets a JSON error instead of a crash.
"""

from __future__ import annotations

import sys
import textwrap

from prompt import LANGUAGE_PLACEHOLDER
from settings import Settings, load_settings


def validate_env_or_raise() -> Settings:
    try:
        settings = load_settings()
    except ValueError as e:
        raise RuntimeError(
            "GEMINI_TIMEOUT_SECONDS must be a number of seconds.\n"
            f"Underlying error: {e}"
        ) from e

    if not settings.gemini_api_key:
        raise RuntimeError(
            "Missing required environment variable: GEMINI_API_KEY\n"
            "Fix: set it in the Netlify site settings, or in a local .env file for development."
        )

    if settings.timeout_seconds <= 0:
        raise RuntimeError(
            f"GEMINI_TIMEOUT_SECONDS must be positive, got {settings.timeout_seconds}"
        )

    if LANGUAGE_PLACEHOLDER not in settings.prompt_template:
        raise RuntimeError(
            f"ANALYSIS_PROMPT_TEMPLATE must contain the {LANGUAGE_PLACEHOLDER} placeholder.\n"
            "Fix: add it where the answer language should go, or unset the variable to use the built-in prompt."
        )

    return settings


def main(argv: list[str]) -> int:
    try:
        settings = validate_env_or_raise()
    except Exception as e:
        msg = textwrap.dedent(
            f"""
            validate_env failed
            -------------------
            {e}
            """
        ).strip()
        print(msg, file=sys.stderr)
        return 1

    # Never print the key itself.
    print(
        f"validate_env OK model={settings.gemini_model} "
        f"base_url={settings.gemini_base_url} timeout={settings.timeout_seconds}s"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
