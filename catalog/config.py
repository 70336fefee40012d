import os
from typing import Mapping, Optional

from fastapi import Request
from pydantic import BaseModel, ConfigDict

# Environment variables that override the defaults below.
ENV_PREFIX = "CATALOG_"


class Settings(BaseModel):
    """Application settings."""

    model_config = ConfigDict(frozen=True)

    api_key: str = "mysecretapikey"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    seed: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        overrides = {}
        for field in cls.model_fields:
            value = env.get(f"{ENV_PREFIX}{field.upper()}")
            if value is not None:
                overrides[field] = value
        return cls(**overrides)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
