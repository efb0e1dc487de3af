import os
from ad_studio.core.domain.errors import ConfigurationError

class Config:
    """Application configuration"""

    # Provider credential; API_KEY wins, GEMINI_API_KEY is accepted as well
    API_KEY: str = os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY", "")

    # Model Configuration
    SCRIPT_MODEL: str = os.getenv("SCRIPT_MODEL", "gemini-2.5-flash")
    VIDEO_MODEL: str = os.getenv("VIDEO_MODEL", "veo-2.0-generate-001")
    SCRIPT_TEMPERATURE: float = float(os.getenv("SCRIPT_TEMPERATURE", "0.8"))
    SCRIPT_TOP_P: float = float(os.getenv("SCRIPT_TOP_P", "0.9"))

    # Video Generation
    VIDEO_POLL_INTERVAL_SECONDS: float = float(os.getenv("VIDEO_POLL_INTERVAL_SECONDS", "10"))
    # 0 disables the cap and waits for the provider indefinitely
    VIDEO_MAX_WAIT_SECONDS: float = float(os.getenv("VIDEO_MAX_WAIT_SECONDS", "0"))
    VIDEO_DOWNLOAD_TIMEOUT_SECONDS: float = float(os.getenv("VIDEO_DOWNLOAD_TIMEOUT_SECONDS", "120"))
    LOADING_MESSAGE_INTERVAL_SECONDS: float = float(os.getenv("LOADING_MESSAGE_INTERVAL_SECONDS", "5"))

    # Uploads and sessions
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "ad_studio_session")
    # Idle sessions are dropped after this many seconds; the oldest goes first past MAX_SESSIONS
    SESSION_IDLE_TIMEOUT_SECONDS: float = float(os.getenv("SESSION_IDLE_TIMEOUT_SECONDS", "3600"))
    MAX_SESSIONS: int = int(os.getenv("MAX_SESSIONS", "1000"))

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "ad-studio")

    # Application Settings
    APP_TITLE: str = "AI Ad Studio"
    APP_VERSION: str = "1.0.0"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    def validate(self) -> None:
        """Fail fast when the provider credential is missing"""
        if not self.API_KEY:
            raise ConfigurationError()

# Global config instance
config = Config()
