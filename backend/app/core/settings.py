# app/core/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    api_title: str = Field(default="Request Form API", alias="API_TITLE")
    cors_origins: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")

    # Outbound mail relay (Gmail by default, use an App Password)
    smtp_host: str = Field(default="smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(default=465, alias="SMTP_PORT")
    smtp_username: Optional[str] = Field(default=None, alias="SMTP_USERNAME")
    smtp_password: Optional[str] = Field(default=None, alias="SMTP_PASSWORD")
    # True -> SMTP_SSL, False -> plain SMTP + STARTTLS
    smtp_use_ssl: bool = Field(default=True, alias="SMTP_USE_SSL")

    # If unset, MAIL_FROM falls back to SMTP_USERNAME and MAIL_TO to MAIL_FROM
    mail_from: Optional[str] = Field(default=None, alias="MAIL_FROM")
    mail_to: Optional[str] = Field(default=None, alias="MAIL_TO")
    mail_subject: str = Field(default="New Request Submission", alias="MAIL_SUBJECT")

    # PayPal REST credentials; sandbox unless PAYPAL_BASE_URL points at api-m.paypal.com
    paypal_client_id: Optional[str] = Field(default=None, alias="PAYPAL_CLIENT_ID")
    paypal_client_secret: Optional[str] = Field(default=None, alias="PAYPAL_CLIENT_SECRET")
    paypal_base_url: str = Field(default="https://api-m.sandbox.paypal.com", alias="PAYPAL_BASE_URL")

    # Fixed price of one request
    payment_amount: str = Field(default="10", alias="PAYMENT_AMOUNT")
    payment_currency: str = Field(default="USD", alias="PAYMENT_CURRENCY")

    @property
    def sender(self) -> Optional[str]:
        return self.mail_from or self.smtp_username

    @property
    def recipient(self) -> Optional[str]:
        return self.mail_to or self.sender

settings = Settings()
