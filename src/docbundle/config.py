# src/docbundle/config.py
from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional, Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized configuration with environment-based validation (Pydantic v2).
    Load order:
      1) Environment variables
      2) .env file (if present)
    """

    model_config = SettingsConfigDict(case_sensitive=False)

    # --- App ---
    ENV: Literal["dev", "test", "prod"] = Field(default="dev", description="Environment profile")
    LOG_LEVEL: str = Field(default="INFO", description="Python logging level (DEBUG, INFO, WARNING, ERROR)")
    LOG_FORMAT: Literal["text", "json"] = Field(default="text", description="Log format for output")

    # --- Downloads ---
    OUTPUT_DIR: str = Field(default="./downloads", description="Directory the download sink writes into")
    FETCH_TIMEOUT: Optional[float] = Field(default=None, description="Per-request timeout in seconds (None = transport default)")
    USER_AGENT: str = Field(default="docbundle/0.1", description="User-Agent header for document fetches")
    DEFAULT_PRODUCT_LABEL: str = Field(default="Product", description="Output name prefix when no product category is set")
    GUARD_DUPLICATE_MERGES: bool = Field(default=True, description="Ignore a merge while one for the same output name is running")
    OPEN_FALLBACK_IN_BROWSER: bool = Field(default=True, description="Open the first source file in a browser when merging fails")

    @field_validator("FETCH_TIMEOUT", mode="before")
    @classmethod
    def _empty_timeout(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @field_validator("DEFAULT_PRODUCT_LABEL", mode="before")
    @classmethod
    def _clean_label(cls, v):
        if v is None:
            return "Product"
        return str(v).strip() or "Product"

    def summary_lines(self) -> list[str]:
        return [
            f"ENV={self.ENV}",
            f"LOG_LEVEL={self.LOG_LEVEL} LOG_FORMAT={self.LOG_FORMAT}",
            f"Output: dir={self.OUTPUT_DIR}, fallback_browser={self.OPEN_FALLBACK_IN_BROWSER}",
            f"Fetch: timeout={self.FETCH_TIMEOUT if self.FETCH_TIMEOUT is not None else 'default'}, user_agent={self.USER_AGENT}",
            f"Merge: guard_duplicates={self.GUARD_DUPLICATE_MERGES}, default_label={self.DEFAULT_PRODUCT_LABEL}",
        ]


@lru_cache()
def get_settings() -> Settings:
    # Load secrets first so .env can reference them
    if os.path.exists("secrets.env"):
        load_dotenv("secrets.env", override=True)

    # Then non-secret .env
    if os.path.exists(".env"):
        load_dotenv(".env", override=False)

    return Settings()


def settings_summary() -> str:
    s = get_settings()
    return "\n".join(s.summary_lines())
