"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveInt = Annotated[int, Field(gt=0)]


class Settings(BaseSettings):
    """Environment-driven credential settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    config_file: NonEmptyStr | None = Field(
        default=None,
        validation_alias="CREDENTIALS_CONFIG_FILE",
    )
    kdf: Literal["bcrypt", "pbkdf2"] = Field(
        default="bcrypt",
        validation_alias="CREDENTIALS_KDF",
    )
    kdf_rounds: PositiveInt = Field(default=50, validation_alias="CREDENTIALS_KDF_ROUNDS")
    pbkdf2_iterations: PositiveInt = Field(
        default=1000,
        validation_alias="CREDENTIALS_PBKDF2_ITERATIONS",
    )
    b64_altchars: str = Field(default="-~", validation_alias="CREDENTIALS_B64_ALTCHARS")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("b64_altchars")
    @classmethod
    def _validate_altchars(cls, value: str) -> str:
        if len(value) != 2 or value[0] == value[1] or not value.isascii():
            raise ValueError("CREDENTIALS_B64_ALTCHARS must be two distinct ASCII characters")
        if any(char.isalnum() or char == "=" for char in value):
            raise ValueError("CREDENTIALS_B64_ALTCHARS must not reuse base64 alphabet characters")
        return value


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache credential settings."""

    return Settings()
