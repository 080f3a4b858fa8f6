"""Configuration for restify.

Settings are read from ``RESTIFY_*`` environment variables into a
:class:`RestifyConfig` model.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field


class RestifyConfig(BaseModel):
    """Configuration model for restify.

    Attributes:
        store_type: Registered store type used by ``create_store`` by default
        json_path: Base directory of the JSON file store
        mongodb_uri: MongoDB connection URI
        mongodb_db_name: MongoDB database name
        log_level: Logging level name for the ``restify`` logger
    """

    store_type: str = "json"
    json_path: str = "./restify_data"
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "restify"
    log_level: str = Field(default="INFO")


def load_config() -> RestifyConfig:
    """Build configuration from environment variables and defaults.

    Returns:
        Populated configuration model

    Environment Variables:
        RESTIFY_STORE_TYPE: Store type (json, mongodb)
        RESTIFY_JSON_PATH: Path for the JSON file store
        RESTIFY_MONGODB_URI: Connection URI for MongoDB
        RESTIFY_MONGODB_DB_NAME: Database name for MongoDB
        RESTIFY_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    values = {
        "store_type": os.getenv("RESTIFY_STORE_TYPE"),
        "json_path": os.getenv("RESTIFY_JSON_PATH"),
        "mongodb_uri": os.getenv("RESTIFY_MONGODB_URI"),
        "mongodb_db_name": os.getenv("RESTIFY_MONGODB_DB_NAME"),
        "log_level": os.getenv("RESTIFY_LOG_LEVEL"),
    }
    return RestifyConfig(**{k: v for k, v in values.items() if v})


_config: Optional[RestifyConfig] = None


def get_config() -> RestifyConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next call reloads it."""
    global _config
    _config = None
