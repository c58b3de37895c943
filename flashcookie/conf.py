from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from flashcookie.utils import check_cookie_name


class Settings(BaseSettings):
    FLASH_COOKIE_NAME: str = "RsFlash"
    FLASH_LIFETIME_SECONDS: int = 60 * 60
    FLASH_CHARSET: str = "utf-8"  # used for percent-encoding the text

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",  # default env file
        extra="ignore",
    )

    @field_validator("FLASH_COOKIE_NAME")
    @classmethod
    def validate_cookie_name(cls, v: str) -> str:
        return check_cookie_name(v)

    @field_validator("FLASH_LIFETIME_SECONDS")
    @classmethod
    def check_lifetime(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("flash lifetime must be positive")
        return v


settings = Settings()
