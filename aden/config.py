# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load application configuration from environment variables /
#   .env file. Provides a typed config object to the CLI and the
#   orchestrator.
#
#   Threshold tuning (ADEN_HIGH_FREQUENCY_THRESHOLD, ...) is NOT read
#   here; the ThresholdResolver owns it and receives the environment
#   explicitly. This module only knows where to look.
#
# CLASSES:
# --------
# - AppConfig (dataclass)
#     log_level: str            (ADEN_LOG_LEVEL,   default "INFO")
#     profile: str | None       (ADEN_PROFILE,     default None)
#     project_dir: str          (ADEN_PROJECT_DIR, default ".")
#     user_config_path: str     (ADEN_USER_CONFIG, default "~/.aden/config.json")
#     project_config_name: str  (default "aden-config.json")
#
# FUNCTION:
# ---------
# - get_config(env_file=None) -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Builds a fresh instance on every call; runs never share state.
#
# USAGE:
# ------
#   from aden.config import get_config
#   config = get_config()
#   print(config.profile)
#   print(config.config_paths())
#
# ==============================================

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv

from .thresholds.resolver import PROJECT_CONFIG_FILE, USER_CONFIG_FILE


@dataclass
class AppConfig:
    """Main application configuration."""
    log_level: str = "INFO"
    profile: Optional[str] = None
    project_dir: str = "."
    user_config_path: str = str(USER_CONFIG_FILE)
    project_config_name: str = PROJECT_CONFIG_FILE

    def config_paths(self, project_dir: Optional[str] = None) -> List[Path]:
        """
        Threshold config files in precedence order (user, then project).

        Args:
            project_dir: Overrides self.project_dir when given
        """
        directory = Path(project_dir or self.project_dir)
        return [
            Path(self.user_config_path).expanduser(),
            directory / self.project_config_name,
        ]


def get_config(env_file: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Load configuration from environment variables / .env file.

    Args:
        env_file: Optional path to a .env file. Defaults to ".env" in
                  the current working directory.

    Returns:
        AppConfig: Application configuration
    """
    # Load .env file; variables already in the environment win
    load_dotenv(dotenv_path=env_file or Path.cwd() / ".env")

    return AppConfig(
        log_level=os.getenv("ADEN_LOG_LEVEL", "INFO").upper(),
        profile=os.getenv("ADEN_PROFILE") or None,
        project_dir=os.getenv("ADEN_PROJECT_DIR", "."),
        user_config_path=os.getenv("ADEN_USER_CONFIG", str(USER_CONFIG_FILE)),
    )
