"""FastAPI dependencies for configuration and pipeline access."""

from config.config import Config
from orchestrator.core import SearchPipeline, create_pipeline


def get_config() -> Config:
    """Dependency to get the process configuration (singleton pattern)."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = Config().validate()
    return get_config._instance


def get_pipeline() -> SearchPipeline:
    """Dependency to get pipeline instance (singleton pattern)."""
    if not hasattr(get_pipeline, "_instance"):
        get_pipeline._instance = create_pipeline(get_config())
    return get_pipeline._instance
