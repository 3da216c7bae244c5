from pydantic import model_validator
from pydantic_settings import BaseSettings

from dailyos.auth.permissions import AccountMode

DEV_SECRET_KEY = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    # App
    secret_key: str = DEV_SECRET_KEY
    environment: str = "development"
    log_level: str = "INFO"

    # Auth
    access_token_expire_minutes: int = 30
    default_account_mode: AccountMode = AccountMode.COMMERCE

    # Lets X-Dev-Role switch the effective role for manual testing
    allow_role_override: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _validate_production(self):
        if self.environment == "production":
            if self.secret_key == DEV_SECRET_KEY:
                raise ValueError(
                    "Production requires a non-default SECRET_KEY"
                )
            if self.allow_role_override:
                raise ValueError(
                    "Production must not allow dev role overrides"
                )
        return self


settings = Settings()
