"""Configuration loading for backlog-slackify.

All run settings (Backlog space, Slack destination, search conditions,
logging) live in a single JSON file. Secrets may instead come from the
environment or a ``.env`` file so they stay out of the repo.
"""

from __future__ import annotations

import json
import os
from typing import Optional

from dotenv import load_dotenv

from core.config import ClientOptions

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# Default config location; SLACKIFY_CONFIG or --config override it.
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")

# Environment fallbacks for the two secret options.
SECRET_ENV_VARS = {
    "backlog_api_key": "BACKLOG_API_KEY",
    "slack_webhook_url": "SLACK_WEBHOOK_URL",
}


def default_config_path() -> str:
    return os.getenv("SLACKIFY_CONFIG") or CONFIG_PATH


def load_config(path: Optional[str] = None) -> dict:
    """Load the JSON config file with a flat, user-friendly schema."""

    path = path or default_config_path()
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def apply_secret_env(raw: dict) -> dict:
    """Fill empty secret options from the environment; config values win."""

    if not isinstance(raw, dict):
        return raw
    merged = dict(raw)
    for option, env_name in SECRET_ENV_VARS.items():
        if merged.get(option):
            continue
        # The misspelled legacy webhook key still counts as configured.
        if option == "slack_webhook_url" and merged.get("slack_webhool_url"):
            continue
        value = os.getenv(env_name)
        if value:
            merged[option] = value
    return merged


def load_options(raw: dict) -> ClientOptions:
    """Build run options from a loaded config dict plus environment secrets."""

    load_dotenv()
    return ClientOptions.from_dict(apply_secret_env(raw))


def logging_config(raw: dict) -> dict:
    # Logging configuration (optional).
    return raw.get("logging", {}) or {}
