from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import API_BASE, DEFAULT_TOPIC_BRANCH

# Load .env once, early
load_dotenv()


class Settings(BaseSettings):
    """Application config (env or .env)."""

    model_config = SettingsConfigDict(env_prefix="", env_file=None, extra="ignore")

    github_token: str | None = Field(default_factory=lambda: os.getenv("GITHUB_TOKEN"))
    github_api_base: str = Field(default=API_BASE)
    default_topic_branch: str = Field(default=DEFAULT_TOPIC_BRANCH)
    log_level: str = Field(default="INFO")


def get_settings() -> Settings:
    return Settings()
