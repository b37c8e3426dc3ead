"""
Configuration for the data receiver.

Values are fixed; the service reads no environment variables or CLI flags.
"""

from typing import List


class Settings:
    """API server configuration."""

    # Paths (relative to the process working directory)
    DB_PATH: str = "received_data.db"
    LOG_DIR: str = "logs"
    LOG_FILE: str = "receiver.log"

    # Server
    API_TITLE: str = "Data Receiver"
    API_DESCRIPTION: str = "Accepts data submissions and lists them with origin/date filters"
    API_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    TABLE_NAME: str = "received_data"
    DB_TIMEOUT: int = 30  # SQLite connection timeout in seconds


settings = Settings()
