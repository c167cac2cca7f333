from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional, List


class Settings(BaseSettings):
    """
    Centralized worker configuration.
    Grouped logically for readability; loaded from env / .env.
    """

    # ------------------------------------------------------------
    # Project / Runtime
    # ------------------------------------------------------------
    PROJECT_NAME: str = "WhatsApp Outbound Dispatcher"
    DEBUG: bool = False

    # ------------------------------------------------------------
    # AWS Core
    # ------------------------------------------------------------
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_SESSION_TOKEN: Optional[str] = None

    # ------------------------------------------------------------
    # Messaging (SQS)
    # ------------------------------------------------------------
    SQS_REGION: str = "us-east-1"
    RESULT_QUEUE_URL: str = Field(
        ...,
        description="Queue that receives outcome records for persistence by a downstream consumer",
    )

    # ------------------------------------------------------------
    # Media provider (Chakra)
    # ------------------------------------------------------------
    PROVIDER_HOST_MARKER: str = Field(
        default="chakrahq.com",
        description="Substring of the target URL identifying the media-upload-capable provider",
    )
    PROVIDER_UPLOAD_BASE_URL: str = Field(
        default="https://api.chakrahq.com",
        description="Scheme + host used to build the upload-public-media endpoint",
    )

    """
    Quoted literals searched for in the raw body before attempting a relay
    """
    MEDIA_MARKERS: List[str] = ['"image"', '"video"', '"audio"', '"document"']

    DEFAULT_DOCUMENT_FILENAME: str = "file.pdf"
    DEFAULT_MEDIA_FILENAME: str = "file.bin"

    # ------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------
    HTTP_TIMEOUT_SECONDS: Optional[float] = Field(
        default=None,
        description="Per-request timeout; unset leaves the client default (no timeout)",
    )

    # ------------------------------------------------------------
    # Outcome status codes
    # ------------------------------------------------------------
    STATUS_DELIVERED: int = 3
    STATUS_FAILED: int = -100

    # ------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------
    LOG_BODY_PREVIEW_CHARS: int = 500

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
