"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Pricing Coherence Diagnostic configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    pcd_log_level: str = "info"

    # Directory holding dimensions.yaml / patterns.yaml / copy.yaml.
    # Empty means the catalog bundled with the package.
    pcd_catalog_dir: str = ""

    # Share links: {share_base_url}{share_base_path}{share_page_path}?{share_query_param}=<token>
    share_base_url: str = "http://localhost:3000"
    share_base_path: str = ""
    share_page_path: str = "/diagnostic-demo"
    share_query_param: str = "r"


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
