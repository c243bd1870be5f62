"""Version control access."""

from build_validation.vcs.git import GitClient

__all__ = ["GitClient"]
