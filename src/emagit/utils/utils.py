# emagit/utils/utils.py
"""
emagit.utils.utils
==================

Configuration helpers for emagit.

- Automatic User Configuration: creates ``~/.config/emagit`` with a ``.env``
  template on first run.
- Robust Configuration Loading: starts from the built-in `DEFAULT_CONFIG` and
  recursively merges ``~/.config/emagit/config.toml`` over it. A missing or
  unparsable user file leaves the defaults in place, so emagit always starts.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger("emagit")

ENV_TEMPLATE = """# Environment for emagit, loaded before anything else runs.
# Set to 1 to log every git invocation to gittrace.log.
EMAGIT_GITTRACE=
"""

DEFAULT_CONFIG: Dict[str, Any] = {
    "commit": {
        "show_staged_changes": True,
        "update_post_commit_task": False,
        "post_commit_delay": 0.1,
        "propagate_errors": False,
    },
    "git": {
        # Empty values mean GIT_EDITOR and emagit's own `edit --wait`.
        "editor_env_var": "",
        "editor_command": "",
    },
    "status": {"display_timeout": 10},
    "logging": {
        "file": "~/.config/emagit/emagit.log",
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": True,
        "separate_error_log": False,
    },
}


def get_config_dir() -> Path:
    return Path.home() / ".config" / "emagit"


def ensure_user_config_exists() -> None:
    """Creates ``~/.config/emagit`` and its ``.env`` template if missing."""
    try:
        config_dir = get_config_dir()
        config_dir.mkdir(parents=True, exist_ok=True)

        user_env_path = config_dir / ".env"
        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")
    except Exception as e:
        logger.critical(f"Could not create user configuration files: {e}", exc_info=True)


def load_config(user_config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges the user's config.toml over them.
    """
    final_config = copy.deepcopy(DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    if user_config_path is None:
        ensure_user_config_exists()
        user_config_path = get_config_dir() / "config.toml"

    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except Exception as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
