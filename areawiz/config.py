"""Centralized config loading: read once at import time."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Load .env from project root (parent of areawiz/)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"

# Environment variables that override config.yaml keys
_ENV_OVERRIDES = {
    "AREAWIZ_OUTPUT_DIR": "output_dir",
    "AREAWIZ_GENERATOR": "generator",
}

_config = yaml.safe_load(CONFIG_PATH.read_text())
for _env_name, _key in _ENV_OVERRIDES.items():
    if os.environ.get(_env_name):
        _config[_key] = os.environ[_env_name]


def get_config() -> dict:
    """Return the loaded config dictionary."""
    return _config
