"""Environment configuration using pydantic-settings."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class SharedConfig(BaseSettings):
    """Settings read from the process environment."""
    log_level: str = Field(default="warning", validation_alias="LOG_LEVEL")
    library_root: str = Field(default="", validation_alias="RUBY2D_GEM_DIR")
    config_path: str = Field(
        default="ruby2d-build.yml", validation_alias="RUBY2D_BUILD_CONFIG"
    )

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }
