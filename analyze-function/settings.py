"""
Runtime configuration for the analyze function.

Values are read from the process environment on every call to `load_settings()`
so a warm function instance picks up rotated secrets without a redeploy.
A local `.env` file is honored (python-dotenv) but never overrides real env vars.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from prompt import ANALYSIS_PROMPT_TEMPLATE

load_dotenv()

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-preview-05-20"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TIMEOUT_SECONDS = 120.0


def _env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    return v


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str | None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    prompt_template: str = ANALYSIS_PROMPT_TEMPLATE


def load_settings() -> Settings:
    """Build a `Settings` snapshot from the current environment."""
    return Settings(
        gemini_api_key=_env("GEMINI_API_KEY"),
        gemini_model=_env("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        gemini_base_url=_env("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL).rstrip("/"),
        timeout_seconds=float(_env("GEMINI_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))),
        prompt_template=_env("ANALYSIS_PROMPT_TEMPLATE", ANALYSIS_PROMPT_TEMPLATE),
    )
