from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings
from typing import List, Optional, Dict


class UserCredentialConfig(BaseModel):
    password: str = Field(..., description="Stored password representation, e.g. '{noop}secret'.")
    roles: List[str] = Field(default_factory=list, description="Role names granted to the user (e.g. 'USER').")


def _default_auth_users() -> Dict[str, UserCredentialConfig]:
    return {
        "user": UserCredentialConfig(password="{noop}password", roles=["USER"]),
        "admin": UserCredentialConfig(password="{noop}admin123", roles=["ADMIN"]),
    }


class Settings(BaseSettings):
    APP_NAME: str = "Auth Token Service"
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # JWT; a random secret is generated per process when none is configured
    JWT_SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, gt=0)
    JWT_ISSUER: str = "auth-token-service"

    # username -> credential record; override with a JSON object in the environment
    AUTH_USERS: Dict[str, UserCredentialConfig] = Field(default_factory=_default_auth_users)

    PRODUCTION_MODE: bool = False
    ALLOWED_ORIGINS: List[str] = ["*"]
    ENABLE_SECURITY_HEADERS: bool = True
    ENABLE_REQUEST_LOGGING: bool = True

    model_config = { # Pydantic V2 uses model_config instead of Config class
        "extra": "ignore",
        "env_file": ".env",
        "env_file_encoding": "utf-8"
    }


settings = Settings()
