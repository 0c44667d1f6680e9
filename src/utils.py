import os
import copy
import logging
import logging.handlers
import yaml
from typing import Dict, Any, Optional
from dotenv import load_dotenv


def load_config(config_path: str = 'config.yaml') -> Dict[str, Any]:
    """Load configuration from YAML file with environment variable overrides."""
    # Load environment variables
    load_dotenv()

    config = get_default_config()
    try:
        if os.path.exists(config_path):
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ValueError("top level must be a mapping")
            config = merge_config(config, file_config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logging.warning(f"Could not load config from {config_path}: {e}")
        config = get_default_config()

    # Override with environment variables
    config = apply_env_overrides(config)

    return config


def get_default_config() -> Dict[str, Any]:
    """Get default configuration values."""
    return {
        'api': {
            'base_url': 'https://api.artic.edu/api/v1',
            'endpoint': 'artworks',
            'timeout': 30,
            'fields': [
                'id',
                'title',
                'place_of_origin',
                'artist_display',
                'inscriptions',
                'date_start',
                'date_end'
            ]
        },
        'http': {
            'user_agent': 'artpick/1.0',
            'max_retries': 3,
            'retry_delay': 1
        },
        'table': {
            'page_size': 12,
            'inscription_max_length': 100,
            'column_width': 28
        },
        'export': {
            'output_filename': 'selected_artworks.jsonl',
            'batch_size': 100
        },
        'logging': {
            'level': 'INFO',
            'log_to_file': True,
            'log_filename': 'artpick.log',
            'rotate_logs': True
        },
        'directories': {
            'output_dir': 'output',
            'logs_dir': 'logs'
        }
    }


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration."""
    env_mappings = {
        'API_BASE_URL': ('api', 'base_url', str),
        'TIMEOUT': ('api', 'timeout', int),
        'PAGE_SIZE': ('table', 'page_size', int),
        'USER_AGENT': ('http', 'user_agent', str),
        'MAX_RETRIES': ('http', 'max_retries', int),
        'OUTPUT_FILENAME': ('export', 'output_filename', str),
        'LOG_LEVEL': ('logging', 'level', str),
        'DEBUG_MODE': ('logging', 'level', lambda x: 'DEBUG' if _parse_bool(x) else config['logging']['level'])
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            try:
                converted_value = converter(value)
                config.setdefault(section, {})[key] = converted_value
            except (ValueError, TypeError) as e:
                logging.warning(f"Invalid value for {env_var}: {value} - {e}")

    return config


def setup_logging(logging_config: Dict[str, Any], logs_dir: Optional[str] = None) -> logging.Logger:
    """Setup logging configuration."""
    level = getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO)

    # Configure logging
    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if logging_config.get('log_to_file', True):
        logs_dir = logs_dir or logging_config.get('logs_dir', 'logs')
        os.makedirs(logs_dir, exist_ok=True)
        log_filename = os.path.join(logs_dir, logging_config.get('log_filename', 'artpick.log'))

        if logging_config.get('rotate_logs', True):
            # Rotating file handler
            file_handler = logging.handlers.RotatingFileHandler(
                log_filename,
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
        else:
            file_handler = logging.FileHandler(log_filename, encoding='utf-8')

        file_handler.setLevel(logging.DEBUG)  # File gets all logs
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def truncate_text(text: str, max_length: int = 100, ellipsis: str = "...") -> str:
    """Truncate text to specified length with ellipsis."""
    if len(text) <= max_length:
        return text
    if max_length <= len(ellipsis):
        return text[:max_length]
    return text[:max_length-len(ellipsis)] + ellipsis


def ensure_directories(config: Dict[str, Any]) -> None:
    """Ensure all required directories exist."""
    for directory in config['directories'].values():
        os.makedirs(directory, exist_ok=True)
