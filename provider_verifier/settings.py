import os
from typing import Optional

from dotenv import load_dotenv

# Load .env file variables into environment
load_dotenv(verbose=True)

DEFAULT_PROVIDER_HOST = "localhost"
DEFAULT_REQUEST_TIMEOUT = 10.0


class Settings:
    """Verifier configuration settings loaded from environment variables."""

    # --- Provider Settings ---
    PROVIDER_HOST: str = DEFAULT_PROVIDER_HOST
    PROVIDER_PORT: Optional[int] = None
    PROVIDER_SCHEME: str = "http"

    # --- Helper Methods using os.getenv ---
    def get_provider_host(self) -> str:
        """Returns the host of the provider under test."""
        return os.getenv("PROVIDER_HOST", DEFAULT_PROVIDER_HOST)

    def get_provider_port(self) -> int | None:
        """Returns the provider port as an integer, or None if not set."""
        port_str = os.getenv("PROVIDER_PORT")
        if port_str is None:
            return None
        try:
            return int(port_str)
        except ValueError:
            raise ValueError("PROVIDER_PORT environment variable must be an integer.")

    def get_provider_scheme(self) -> str:
        """Returns the URL scheme used to reach the provider, defaulting to 'http'."""
        scheme = os.getenv("PROVIDER_SCHEME", "http").lower()
        if scheme not in ("http", "https"):
            raise ValueError(f"Invalid PROVIDER_SCHEME: {scheme}")
        return scheme

    def get_request_timeout(self) -> float:
        """Returns the timeout, in seconds, applied to each provider request."""
        try:
            timeout = float(os.getenv("PROVIDER_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT)))
        except ValueError:
            raise ValueError("PROVIDER_REQUEST_TIMEOUT environment variable must be a number.")
        if timeout <= 0:
            raise ValueError("PROVIDER_REQUEST_TIMEOUT environment variable must be positive.")
        return timeout

    # --- Logging Settings ---
    def get_log_level(self, default: str = "INFO") -> str:
        """Gets the configured log level, defaulting if not set."""
        return os.getenv("LOG_LEVEL", default).upper()
