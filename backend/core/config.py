# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Application configuration.
All secrets and file locations are loaded from environment variables (via
etc/app.conf).  Nothing sensitive is hard-coded here.

A Settings instance is built once by ``main.create_app`` and handed to the
pieces that need it; there is no hot reload.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

# Project root is two levels up from this file  (backend/core/config.py → chirpy/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    # One JSON file per table, both inside data_dir
    data_dir: Path = _PROJECT_ROOT / "data"
    chirps_db_file: str = "chirps.json"
    users_db_file: str = "users.json"

    # JWT signing secret – must be a long, random string.  Left empty the
    # service still starts, but login refuses to issue tokens.
    jwt_secret: str = ""
    token_issuer: str = "chirpy"

    # Shared key the Polka payment provider presents on its webhook
    polka_key: str = ""

    # PBKDF2 work factor.  Lower it only in tests.
    password_hash_rounds: int = 600_000

    # When true only the author of a chirp may update or delete it
    enforce_chirp_ownership: bool = True

    cors_origins: List[str] = ["http://localhost:8080"]

    # Served under /app when the directory exists
    static_dir: Path = _PROJECT_ROOT / "frontend"

    log_file: Path = _PROJECT_ROOT / "log" / "app.log"

    # app.conf lives in etc/ – resolved relative to the project root so that
    # the file is found regardless of the working directory.
    model_config = {"env_file": str(_PROJECT_ROOT / "etc" / "app.conf"), "extra": "ignore"}

    @property
    def chirps_path(self) -> Path:
        return self.data_dir / self.chirps_db_file

    @property
    def users_path(self) -> Path:
        return self.data_dir / self.users_db_file
