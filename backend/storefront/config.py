"""
storefront/config.py - Application configuration.

This module defines a Pydantic BaseSettings class that loads configuration from the
environment. Outside production a local `.env` file is loaded first (python-dotenv),
so developers can keep Razorpay / Firebase credentials out of their shell profile.

Firebase itself is NOT initialized here; see `storefront.core.deps.init_dependencies`.
"""
import os
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

PRODUCTION = "production"

if (os.getenv("ENVIRONMENT") or "").lower() != PRODUCTION:
    load_dotenv(os.path.join(os.getcwd(), ".env"))


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""
    environment: str = Field("development", description="development | production")
    port: int = 10000
    log_level: str = "INFO"
    allowed_origins: str = "*"  # Comma-separated list or '*' for all

    # Razorpay
    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""
    razorpay_base_url: str = "https://api.razorpay.com"
    razorpay_timeout: float = 15.0

    # Firebase service account (Render / Cloud Run style env credentials)
    firebase_project_id: str = ""
    firebase_client_email: str = ""
    firebase_private_key: str = ""
    firebase_private_key_id: str = ""
    firebase_client_id: str = ""
    firebase_client_cert_url: str = ""
    firebase_auth_uri: str = "https://accounts.google.com/o/oauth2/auth"
    firebase_token_uri: str = "https://oauth2.googleapis.com/token"
    firebase_auth_provider_cert_url: str = "https://www.googleapis.com/oauth2/v1/certs"
    # Local development fallback when the env credentials are not set
    firebase_cred_file: Optional[str] = None

    firebase_connect_timeout: float = 5.0
    firebase_collection_prefix: str = ""

    class Config:
        case_sensitive = False
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def origins(self) -> List[str]:
        if not self.allowed_origins or self.allowed_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def razorpay_configured(self) -> bool:
        return bool(self.razorpay_key_id and self.razorpay_key_secret)

    def firebase_env_credentials(self) -> bool:
        """True when the service account can be built from env variables alone."""
        return all([
            self.firebase_project_id,
            self.firebase_client_email,
            self.firebase_private_key,
            self.firebase_private_key_id,
            self.firebase_client_cert_url,
        ])

    def service_account_info(self) -> Dict[str, str]:
        # Render/Heroku style env vars carry the PEM with literal "\n" sequences
        private_key = self.firebase_private_key.replace("\\n", "\n")
        return {
            "type": "service_account",
            "project_id": self.firebase_project_id,
            "private_key_id": self.firebase_private_key_id,
            "private_key": private_key,
            "client_email": self.firebase_client_email,
            "client_id": self.firebase_client_id,
            "auth_uri": self.firebase_auth_uri,
            "token_uri": self.firebase_token_uri,
            "auth_provider_x509_cert_url": self.firebase_auth_provider_cert_url,
            "client_x509_cert_url": self.firebase_client_cert_url,
            "universe_domain": "googleapis.com",
        }

    def missing_required(self) -> List[str]:
        """Names of the required environment variables that are not set."""
        missing = []
        if not self.razorpay_key_id:
            missing.append("RAZORPAY_KEY_ID")
        if not self.razorpay_key_secret:
            missing.append("RAZORPAY_KEY_SECRET")
        if not self.firebase_project_id:
            missing.append("FIREBASE_PROJECT_ID")
        if self.firebase_cred_file and os.path.exists(self.firebase_cred_file):
            return missing
        for name, value in (
            ("FIREBASE_CLIENT_EMAIL", self.firebase_client_email),
            ("FIREBASE_PRIVATE_KEY", self.firebase_private_key),
            ("FIREBASE_PRIVATE_KEY_ID", self.firebase_private_key_id),
            ("FIREBASE_CLIENT_CERT_URL", self.firebase_client_cert_url),
        ):
            if not value:
                missing.append(name)
        return missing

    def collection(self, name: str) -> str:
        prefix = (self.firebase_collection_prefix or "").strip()
        return f"{prefix}{name}" if prefix else name


def mask(value: Optional[str], keep: int = 4) -> str:
    """'***abcd' style rendering for secrets in startup logs."""
    if not value:
        return "Not set"
    return "***" + value[-keep:]
