"""Configuration loading for the Claude agent stack."""

import json
import os
from typing import Any, Dict, Mapping, Optional

from .logger import get_logger

logger = get_logger(__name__)

# Environment variable -> config key
ENV_KEYS = {
    'imageUri': 'image_uri',
    'memorySize': 'memory_size',
    'timeout': 'timeout',
    'namePrefix': 'name_prefix',
    'autoDeleteObjects': 'auto_delete_objects',
}

def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Load configuration based on environment.

    Values come from environment variables first. When a
    ``config/config.<ENV>.json`` file exists its keys take precedence.

    Args:
        environ: Mapping to read variables from, defaults to ``os.environ``

    Returns:
        Raw configuration dictionary, unvalidated
    """
    if environ is None:
        environ = os.environ

    env = environ.get('ENV', 'dev')
    config: Dict[str, Any] = {
        'env_name': env,
        'account': environ.get('CDK_DEFAULT_ACCOUNT', ''),
        'region': environ.get('CDK_DEFAULT_REGION', ''),
    }
    for env_key, config_key in ENV_KEYS.items():
        if environ.get(env_key) is not None:
            config[config_key] = environ[env_key]

    config_path = os.path.join('config', f'config.{env}.json')
    try:
        with open(config_path, 'r') as f:
            overrides = json.load(f)
    except FileNotFoundError:
        logger.debug(f"No config file at {config_path}, using environment only")
    else:
        logger.info(f"Loaded configuration overrides from {config_path}")
        config.update(overrides)

    return config
