from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
    )

    SERVICE_NAME: str = "PayHero Relay"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # PayHero gateway credentials - no fallbacks, the gateway client refuses to start without them
    PAYHERO_USERNAME: Optional[str] = None
    PAYHERO_PASSWORD: Optional[str] = None
    PAYHERO_ACCOUNT_ID: Optional[int] = None
    PAYHERO_CALLBACK_URL: Optional[str] = None

    PAYHERO_BASE_URL: str = "https://backend.payhero.co.ke"
    PAYHERO_PAYMENTS_PATH: str = "/api/v2/payments"
    PAYHERO_PROVIDER: str = "m-pesa"
    PAYMENT_TIMEOUT: float = 30.0

    # Payment request rules
    PHONE_COUNTRY_CODE: str = "254"
    CURRENCY: str = "KES"
    REFERENCE_PREFIX: str = "NYOTA"
    PAYMENT_TYPE: str = "nyota_loan"

    # Connectivity probe
    PROBE_PHONE_NUMBER: str = "254700000000"
    PROBE_INTERNET_URL: str = "https://www.google.com"
    DEPLOY_REGION: str = "unknown"

    # SMS notifications (optional)
    SMS_API_URL: Optional[str] = None
    SMS_API_KEY: Optional[str] = None
    SMS_SENDER_ID: str = "NYOTA"
    SMS_TIMEOUT: float = 30.0

    # CORS
    CORS_ALLOW_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_METHODS: List[str] = ["GET", "OPTIONS", "PATCH", "DELETE", "POST", "PUT"]
    CORS_ALLOW_HEADERS: List[str] = [
        "X-CSRF-Token",
        "X-Requested-With",
        "Accept",
        "Accept-Version",
        "Content-Length",
        "Content-MD5",
        "Content-Type",
        "Date",
        "X-Api-Version",
    ]

    @property
    def PAYHERO_PAYMENTS_URL(self) -> str:
        return self.PAYHERO_BASE_URL.rstrip("/") + "/" + self.PAYHERO_PAYMENTS_PATH.lstrip("/")

    @property
    def SMS_ENABLED(self) -> bool:
        return bool(self.SMS_API_URL and self.SMS_API_KEY)

    def missing_gateway_settings(self) -> List[str]:
        required = {
            "PAYHERO_USERNAME": self.PAYHERO_USERNAME,
            "PAYHERO_PASSWORD": self.PAYHERO_PASSWORD,
            "PAYHERO_ACCOUNT_ID": self.PAYHERO_ACCOUNT_ID,
        }
        return [key for key, value in required.items() if value in (None, "")]


settings = Settings()


def get_settings() -> Settings:
    return settings
