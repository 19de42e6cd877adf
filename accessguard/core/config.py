from typing import Any, List, Optional

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "AccessGuard"
    VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"

    # --- Environment & Debug ---
    ENVIRONMENT: str = "local"
    DEBUG: bool = False  # Default to False for security
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # --- Security ---
    SECRET_KEY: Optional[SecretStr] = Field(
        default=None,
        validate_default=True,
        description="JWT signing key; loaded from .env",
    )
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours
    BCRYPT_ROUNDS: int = 12

    # --- RBAC ---
    DEFAULT_ROLE_NAME: str = Field(
        default="Employee",
        description="Role assigned to self-registered accounts",
    )
    AUDIT_PAGE_SIZE_MAX: int = 200

    # --- CORS ---
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=list,
        validate_default=True,
        description="List of allowed CORS origins. Configure in .env",
    )

    # --- Database Config ---
    DATABASE_URL: str = "sqlite:///./accessguard.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_PRE_PING: bool = True
    DB_CREATE_ALL: bool = True

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def default_allowed_origins(
        cls, v: Optional[List[str]], info: ValidationInfo
    ) -> Optional[List[str]]:
        env = info.data.get("ENVIRONMENT") or "local"
        if env != "production":
            if v is None:
                return ["http://localhost:5173", "http://localhost:3000"]
            if isinstance(v, str) and v.strip() in ("", "[]"):
                return ["http://localhost:5173", "http://localhost:3000"]
            if isinstance(v, list) and len(v) == 0:
                return ["http://localhost:5173", "http://localhost:3000"]
        return v

    @field_validator("SECRET_KEY", mode="before")
    @classmethod
    def validate_secret_key(
        cls, v: Optional[SecretStr], info: ValidationInfo
    ) -> Optional[SecretStr]:
        # Require a SECRET_KEY for non-local deployments
        env = info.data.get("ENVIRONMENT") or "local"
        if env != "local" and not v:
            raise ValueError(
                "SECRET_KEY must be set in environment for non-local deployments"
            )
        return v

    @field_validator("ACCESS_TOKEN_EXPIRE_MINUTES", "BCRYPT_ROUNDS", mode="after")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    def signing_key(self) -> str:
        """Plain signing key, with the local development fallback."""
        if self.SECRET_KEY is None:
            return "development-secret-key"
        return self.SECRET_KEY.get_secret_value()

    def engine_options(self) -> dict[str, Any]:
        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {
            "pool_pre_ping": self.DB_POOL_PRE_PING,
            "pool_size": self.DB_POOL_SIZE,
            "max_overflow": self.DB_MAX_OVERFLOW,
        }


settings = Settings()
