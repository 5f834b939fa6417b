"""
Prompt Sync Configuration Loader

Loads configuration from config.yaml with environment variable overrides.
Environment variables override YAML settings with format:
  PROMPTSYNC_{SECTION}_{KEY}

Example:
  PROMPTSYNC_SERVER_PORT=9000
  PROMPTSYNC_PROMPT_CHAR_BUDGET=500
"""

import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "PROMPTSYNC_"

# Default configuration (fallback if config.yaml missing)
DEFAULT_CONFIG = {
    "server": {
        "host": "0.0.0.0",
        "port": 8000,
        "cors_origins": ["*"],
        "log_level": "INFO"
    },
    "prompt": {
        "char_budget": 380,
        "negative_text": (
            "lowres, text, error, cropped, worst quality, low quality, jpeg artifacts, ugly, "
            "duplicate, morbid, mutilated, out of frame, extra fingers, mutated hands, "
            "poorly drawn hands, poorly drawn face, mutation, deformed, blurry, dehydrated, "
            "bad anatomy"
        ),
        "presets": {
            "lighting": {
                "label": "Portrait Lighting",
                "tooltip": "Insert common portrait lighting",
                "text": (
                    "Natural Lighting, Studio lighting, Cinematic Lighting, "
                    "Crepuscular Rays, X-Ray, Backlight"
                )
            },
            "polish": {
                "label": "Common Polish",
                "tooltip": "Insert common image polish terms",
                "text": (
                    "insanely detailed and intricate, gorgeous, Surrealistic, smooth, "
                    "sharp focus, Painting, Digital Art, Concept Art, Illustration, "
                    "Trending on ArtStation, in a symbolic and meaningful style, 8K"
                )
            }
        }
    }
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from config.yaml with environment variable overrides.

    Args:
        config_path: Path to config.yaml file (optional, auto-detected if not provided)

    Returns:
        Complete configuration dictionary with nested sections
    """
    # Start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is None:
        # Auto-detect config.yaml at the repository root
        base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        config_path = os.path.join(base_dir, "config.yaml")

    if os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if yaml_config:
                # Deep merge: YAML overrides defaults
                config = _deep_merge(config, yaml_config)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load {config_path}: {e}; using default configuration")
    else:
        logger.info(f"config.yaml not found at {config_path}, using default configuration")

    # Apply environment variable overrides
    config = _apply_env_overrides(config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary (values take precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: Dict[str, Any], environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Format: PROMPTSYNC_{SECTION}_{KEY}. Keys may contain underscores
    themselves (PROMPTSYNC_PROMPT_CHAR_BUDGET -> prompt.char_budget).

    Examples:
        PROMPTSYNC_SERVER_PORT=9000
        PROMPTSYNC_SERVER_LOG_LEVEL=DEBUG
        PROMPTSYNC_PROMPT_NEGATIVE_TEXT="lowres, blurry"
    """
    if environ is None:
        environ = os.environ

    for env_key, env_value in environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue

        # Parse env key: PROMPTSYNC_SECTION_KEY -> ("section", "key")
        section, _, final_key = env_key[len(ENV_PREFIX):].lower().partition('_')

        if not final_key:
            continue  # Skip malformed env vars

        target = config.get(section)
        if not isinstance(target, dict) or final_key not in target:
            continue

        # Type conversion based on existing config value
        current = target[final_key]
        try:
            if isinstance(current, bool):
                target[final_key] = env_value.lower() in ('true', '1', 'yes')
            elif isinstance(current, int):
                target[final_key] = int(env_value)
            elif isinstance(current, float):
                target[final_key] = float(env_value)
            elif isinstance(current, (dict, list)):
                logger.warning(f"Ignoring {env_key}: {section}.{final_key} cannot be set from the environment")
            else:
                target[final_key] = env_value
        except ValueError:
            logger.warning(f"Ignoring {env_key}: cannot convert {env_value!r} to {type(current).__name__}")

    return config


# Global config instance (loaded once on import)
CONFIG = load_config()
