import logging

from pydantic_settings import BaseSettings
from pydantic import ConfigDict, Field
from typing import List, Optional

class Settings(BaseSettings):
    # Environment
    ENV: str = "development"
    CONFIG_STRICT: bool = False

    # GitHub GraphQL
    GITHUB_TOKENS: str = ""  # comma-separated, handed out round-robin
    GITHUB_GRAPHQL_URL: str = "https://api.github.com/graphql"
    GITHUB_REQUEST_TIMEOUT_SECONDS: float = 10.0

    # One in-flight request per year, capped by the pool size
    FETCH_MAX_WORKERS: int = Field(default=8, ge=1)

    # Streak policy
    GRACE_DAYS: int = Field(default=1, ge=0)
    STARTING_YEAR: Optional[int] = None  # None = current year only

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def github_tokens(self) -> List[str]:
        return [token.strip() for token in self.GITHUB_TOKENS.split(",") if token.strip()]


settings = Settings()


def validate_config(strict: Optional[bool] = None, settings_obj: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> bool:
    """Validate required configuration.

    In strict mode raise RuntimeError; otherwise emit warnings only.
    Tokens are never logged, only whether any were found.
    """
    cfg = settings_obj or settings
    log = logger or logging.getLogger("streakstats")
    strict_mode = strict if strict is not None else getattr(cfg, "CONFIG_STRICT", False)

    raw_tokens = getattr(cfg, "GITHUB_TOKENS", "") or ""
    if not any(token.strip() for token in raw_tokens.split(",")):
        message = "Missing required configuration: GITHUB_TOKENS"
        if strict_mode:
            raise RuntimeError(message)
        log.warning(message)

    return True
