"""Centralized application settings using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

EXPERIMENT_SLUG = "01-validate-incremental-build"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BUILD_VALIDATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Workspace Settings
    experiments_root: Path = Path("data")
    scans_file_name: str = "scans.csv"

    # External Tools
    git_executable: str = "git"
    gradle_wrapper: str = "./gradlew"

    # Gradle Enterprise
    ge_server: str | None = None

    # Logging
    log_level: str = "WARNING"
    log_json: bool = False

    @property
    def experiment_dir(self) -> Path:
        """Scratch directory the project is cloned into."""
        return self.experiments_root / EXPERIMENT_SLUG

    @property
    def scans_file(self) -> Path:
        """CSV file that collects the build scans of every run."""
        return self.experiment_dir / self.scans_file_name


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
