"""Library configuration."""

import sys

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tolerance defaults loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BBOX2D_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Absolute tolerance used by the approx_* predicates when none is given
    default_epsilon: float = Field(default=sys.float_info.epsilon, ge=0.0)

    # Maximum distance in representable doubles for the approx_* predicates
    default_max_ulps: int = Field(default=4, ge=0)


settings = Settings()
