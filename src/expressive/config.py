"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Settings for the transport started by Express.listen().

Configuration comes from code or from the environment:

    # Code
    config = ServerConfig(port=3000, log_level="DEBUG")

    # Environment
    EXPRESSIVE_PORT=3000 EXPRESSIVE_LOG_LEVEL=DEBUG python app.py
    config = ServerConfig.from_env()

Values are validated eagerly, when the server is created, so a bad port
fails at startup rather than on the first request.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """
    Configuration for the HTTP transport.

    Development:
        ServerConfig(host="127.0.0.1", port=8080, log_level="DEBUG")

    Production:
        ServerConfig(host="0.0.0.0", port=80, log_level="INFO")
    """

    host: str = "127.0.0.1"
    """
    The IP address to bind to.
    - "127.0.0.1" - Localhost only
    - "0.0.0.0" - All network interfaces
    """

    port: int = 8080
    """The port number to listen on. 0 lets the OS pick a free port."""

    max_request_size: int = 10 * 1024 * 1024  # 10 MB
    """
    Maximum request body size in bytes.
    Larger bodies are rejected with 413 before any handler runs.
    """

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    server_name: str = "expressive/1.0"
    """Value of the Server header."""

    static_dir: Optional[str] = None
    """
    Directory served by static_files() when set.
    Registered first, so every other route takes precedence over it.
    """

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

            EXPRESSIVE_HOST              (default: 127.0.0.1)
            EXPRESSIVE_PORT              (default: 8080)
            EXPRESSIVE_MAX_REQUEST_SIZE  (default: 10485760)
            EXPRESSIVE_LOG_LEVEL         (default: INFO)
            EXPRESSIVE_STATIC_DIR        (default: None)
        """
        return cls(
            host=os.getenv("EXPRESSIVE_HOST", "127.0.0.1"),
            port=int(os.getenv("EXPRESSIVE_PORT", "8080")),
            max_request_size=int(
                os.getenv("EXPRESSIVE_MAX_REQUEST_SIZE", str(10 * 1024 * 1024))
            ),
            log_level=os.getenv("EXPRESSIVE_LOG_LEVEL", "INFO"),
            static_dir=os.getenv("EXPRESSIVE_STATIC_DIR"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On the first invalid value.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.max_request_size < 0:
            raise ValueError("max_request_size must be >= 0")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {', '.join(LOG_LEVELS)}."
            )

        if self.static_dir is not None and not os.path.isdir(self.static_dir):
            raise ValueError(f"static_dir does not exist: {self.static_dir}")
