from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Webservice defaults loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PRESTASHOP_", extra="ignore")

    shop_url: str = ""
    endpoint: str = "/api"
    token: str = ""
    shop_id: int | None = None

    # Seconds, applied to every outbound call
    timeout: float = 30.0


def get_settings() -> Settings:
    """
    Read the current defaults.

    Built fresh on every call so explicit configuration and environment
    changes are always picked up.
    """
    return Settings()


# =============================================================================
# WEBSERVICE PROTOCOL CONSTANTS
# =============================================================================

# Content negotiation headers sent with every call
FORMAT_HEADERS = {
    "Io-Format": "JSON",
    "Output-Format": "JSON",
}

# Content type of XML write payloads
XML_CONTENT_TYPE = "text/xml; charset=UTF8"
