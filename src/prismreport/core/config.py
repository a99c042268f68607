# src/prismreport/core/config.py

import logging
import os

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)


def _as_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "t", "y", "yes")


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    def __init__(self):
        # --- Prism credentials ---
        self.PRISM_USERNAME = self._get_secret("PRISM_USERNAME")
        self.PRISM_PASSWORD = self._get_secret("PRISM_PASSWORD")

    @staticmethod
    def _get_secret(key: str, default: str = None) -> str:
        """
        Retrieves a secret from a file (Docker secret/volume) or falls back to environment variable.

        Raises:
            PermissionError: If the secret file exists but cannot be read due to permissions.
            IOError: If the secret file exists but cannot be read due to I/O errors.
        """
        secret_file = f"/etc/prismreport/secrets/{key}"
        if os.path.exists(secret_file):
            try:
                with open(secret_file, "r") as f:
                    value = f.read().strip()
                    logging.getLogger(__name__).debug(f"Loaded secret '{key}' from {secret_file}")
                    return value
            except PermissionError as e:
                raise PermissionError(
                    f"Secret file '{secret_file}' exists but cannot be read due to permission denied. "
                    f"Please check file permissions or run with appropriate privileges."
                ) from e
            except (IOError, OSError) as e:
                raise IOError(
                    f"Secret file '{secret_file}' exists but cannot be read: {e}. "
                    f"Please check the file integrity and system resources."
                ) from e
        return os.getenv(key, default)

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Prism connection variables ---
    PRISM_PORT = int(os.getenv("PRISM_PORT", "9440"))
    # Prism ships with self-signed certificates, so verification is opt-in.
    PRISM_VERIFY_CERTS = _as_bool(os.getenv("PRISM_VERIFY_CERTS", "False"))
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "5"))
    USER_AGENT = os.getenv("USER_AGENT", "prismreport")

    # --- Query variables ---
    # Averaging window, in seconds, applied by Prism Central to grouped metrics.
    DOWNSAMPLING_INTERVAL = int(os.getenv("DOWNSAMPLING_INTERVAL", "3600"))
    INVENTORY_PAGE_SIZE = int(os.getenv("INVENTORY_PAGE_SIZE", "500"))

    # --- Pacing variables (courtesy rate limit, not flow control) ---
    CLUSTER_PACING_SECONDS = float(os.getenv("CLUSTER_PACING_SECONDS", "0.25"))
    INSTANCE_PACING_SECONDS = float(os.getenv("INSTANCE_PACING_SECONDS", "0.1"))

    # --- Input / output variables ---
    TARGETS_FILE = os.getenv("TARGETS_FILE", "targets.csv")
    TARGET_COLUMN = os.getenv("TARGET_COLUMN", "Prism Central VIP")
    OUTPUT_DIR = os.getenv("OUTPUT_DIR", ".")

    @property
    def has_credentials(self) -> bool:
        return bool(self.PRISM_USERNAME and self.PRISM_PASSWORD)

    def validate_instance(self):
        if not 0 < self.PRISM_PORT < 65536:
            raise ValueError("PRISM_PORT must be between 1 and 65535.")
        if self.REQUEST_TIMEOUT <= 0:
            raise ValueError("REQUEST_TIMEOUT must be a positive number of seconds.")
        if self.DOWNSAMPLING_INTERVAL <= 0:
            raise ValueError("DOWNSAMPLING_INTERVAL must be a positive number of seconds.")
        if self.INVENTORY_PAGE_SIZE <= 0:
            raise ValueError("INVENTORY_PAGE_SIZE must be positive.")
        if self.CLUSTER_PACING_SECONDS < 0 or self.INSTANCE_PACING_SECONDS < 0:
            raise ValueError("Pacing delays cannot be negative.")
        if not self.PRISM_VERIFY_CERTS:
            logging.getLogger(__name__).debug("TLS certificate verification is disabled for Prism endpoints.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
