"""
Centralized configuration management for the file validator.
Loads environment variables and provides default configurations.
"""

import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Settings:
    """Application settings and configuration."""

    # Configuration file
    FILE_VALIDATOR_CONFIG_PATH: str = os.getenv("FILE_VALIDATOR_CONFIG_PATH", "appsettings.json")
    FILE_VALIDATOR_SECTION: str = os.getenv("FILE_VALIDATOR_SECTION", "FileValidator")

    # Comma-separated modules imported at startup to register scanner plugins
    SCANNER_PLUGIN_MODULES: str = os.getenv("SCANNER_PLUGIN_MODULES", "")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
    LOG_DIR: Optional[str] = os.getenv("LOG_DIR")

    def scanner_plugin_modules(self) -> List[str]:
        """Module paths listed in SCANNER_PLUGIN_MODULES."""
        return [module.strip() for module in self.SCANNER_PLUGIN_MODULES.split(",") if module.strip()]

    @classmethod
    def validate(cls) -> None:
        """Validate that all settings hold usable values."""
        errors = []
        if cls.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"LOG_LEVEL must be a logging level name, got '{cls.LOG_LEVEL}'")
        if not cls.FILE_VALIDATOR_SECTION.strip():
            errors.append("FILE_VALIDATOR_SECTION must not be empty")
        if errors:
            raise ValueError(f"Invalid environment settings: {'; '.join(errors)}")

# Global settings instance
settings = Settings()
