"""
actionfinder process settings.

Configuration management using pydantic settings.
Loads from environment variables with ACTIONFINDER_ prefix.
"""

from typing import List, Literal, Optional

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-level settings; per-workspace options live in the YAML config.

    Environment variables:
    - ACTIONFINDER_CONFIG_PATH: Explicit config file (skips the upward search)
    - ACTIONFINDER_LOG_LEVEL: Logging level for the CLI (default: WARNING)
    - ACTIONFINDER_DEBUG: Shorthand for DEBUG logging (default: false)
    - ACTIONFINDER_NODE_PATH_RAW: Comma-separated extra directories for
      Node.js module resolution during introspection
    """

    model_config = SettingsConfigDict(
        env_prefix="ACTIONFINDER_",
        env_file=".env",
        extra="ignore",
    )

    config_path: Optional[str] = None

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    debug: bool = False

    # Raw string field for comma-separated values
    node_path_raw: str = ""

    @computed_field
    @property
    def extra_node_paths(self) -> List[str]:
        """Parse comma-separated node paths into list."""
        if not self.node_path_raw:
            return []
        return [v.strip() for v in self.node_path_raw.split(",") if v.strip()]

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
