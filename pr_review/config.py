from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import Field  # type: ignore[import]
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore[import]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    repo_path: Path = Field(default_factory=Path.cwd, alias="REPO_PATH", description="Local clone to read pull requests from")
    target_ref: str = Field(default="main", alias="TARGET_REF", description="Branch pull requests are merged into")
    change_set: Optional[str] = Field(
        default=None, alias="CHANGE_SET", description="Pull request number, or 'latest', reviewed when none is requested"
    )
    max_files: Optional[int] = Field(default=None, alias="MAX_FILES", description="Cap on the number of files analysed per review")
    large_file_lines: int = Field(default=300, alias="LARGE_FILE_LINES")
    pull_request_count: int = Field(default=5, alias="PULL_REQUEST_COUNT")

    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS", description="Origins allowed to call the API from a browser")

    console_width: Optional[int] = Field(default=None, description="Override console width for Rich output")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


settings = Settings()
