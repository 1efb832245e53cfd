"""
Configuration management system for the frame pipeline.
Supports TOML and JSON configuration files with validation.
"""

import os
import json
from dataclasses import dataclass

# Handle tomllib import for different Python versions
try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11 with tomli package
from typing import Dict, List, Optional, Any, Union
from pathlib import Path

ENV_PREFIX = "CRYPT_IMAGES_"


@dataclass
class PipelineConfig:
    """Main configuration class for the frame pipeline."""

    # Paths
    data_dir: str = "data"
    catalog_file: str = "necrodancer.xml"

    # Store settings
    store_url: str = ""
    create_container: bool = True
    container_public_access: Optional[str] = "blob"
    content_type: str = "image/png"
    cache_control: str = "max-age=604800"
    request_timeout: float = 30.0

    # Processing settings
    compression_level: int = 6
    fail_fast: bool = True

    # Concurrency settings
    max_build_workers: int = 4
    max_publish_workers: int = 16

    # Logging settings
    log_level: str = "INFO"

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "PipelineConfig":
        """Load configuration from TOML or JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() == '.toml':
            return cls._from_toml(config_path)
        elif config_path.suffix.lower() == '.json':
            return cls._from_json(config_path)
        else:
            raise ValueError(f"Unsupported configuration format: {config_path.suffix}")

    @classmethod
    def _from_toml(cls, config_path: Path) -> "PipelineConfig":
        """Load configuration from TOML file."""
        with open(config_path, 'rb') as f:
            data = tomllib.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_json(cls, config_path: Path) -> "PipelineConfig":
        """Load configuration from JSON file."""
        with open(config_path, 'r') as f:
            data = json.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """Create configuration from dictionary."""
        config_data = {}

        if 'paths' in data:
            paths = data['paths']
            config_data['data_dir'] = paths.get('data_dir', 'data')
            config_data['catalog_file'] = paths.get('catalog_file', 'necrodancer.xml')

        if 'store' in data:
            store = data['store']
            config_data['store_url'] = store.get('url', '')
            config_data['create_container'] = store.get('create_container', True)
            config_data['container_public_access'] = store.get('public_access', 'blob') or None
            config_data['content_type'] = store.get('content_type', 'image/png')
            config_data['cache_control'] = store.get('cache_control', 'max-age=604800')
            config_data['request_timeout'] = float(store.get('request_timeout', 30.0))

        if 'processing' in data:
            processing = data['processing']
            config_data['compression_level'] = processing.get('compression_level', 6)
            config_data['fail_fast'] = processing.get('fail_fast', True)

        if 'concurrency' in data:
            concurrency = data['concurrency']
            config_data['max_build_workers'] = concurrency.get('build_workers', 4)
            config_data['max_publish_workers'] = concurrency.get('publish_workers', 16)

        if 'logging' in data:
            config_data['log_level'] = data['logging'].get('level', 'INFO')

        return cls(**config_data)

    @classmethod
    def default(cls) -> "PipelineConfig":
        """Create default configuration with environment variable overrides."""
        return cls._apply_env_overrides(cls())

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Create configuration from environment variables only."""
        config = cls()
        return cls._apply_env_overrides(config)

    @classmethod
    def _apply_env_overrides(cls, config: "PipelineConfig") -> "PipelineConfig":
        """Apply environment variable overrides to configuration."""

        # Paths
        if os.getenv('CRYPT_IMAGES_DATA_DIR'):
            config.data_dir = os.getenv('CRYPT_IMAGES_DATA_DIR', 'data')

        if os.getenv('CRYPT_IMAGES_CATALOG_FILE'):
            config.catalog_file = os.getenv('CRYPT_IMAGES_CATALOG_FILE', 'necrodancer.xml')

        # Store settings
        if os.getenv('CRYPT_IMAGES_STORE_URL'):
            config.store_url = os.getenv('CRYPT_IMAGES_STORE_URL', '')

        if os.getenv('CRYPT_IMAGES_CREATE_CONTAINER'):
            config.create_container = os.getenv('CRYPT_IMAGES_CREATE_CONTAINER', 'true').lower() == 'true'

        if os.getenv('CRYPT_IMAGES_CACHE_CONTROL'):
            config.cache_control = os.getenv('CRYPT_IMAGES_CACHE_CONTROL', 'max-age=604800')

        if os.getenv('CRYPT_IMAGES_REQUEST_TIMEOUT'):
            config.request_timeout = float(os.getenv('CRYPT_IMAGES_REQUEST_TIMEOUT', '30'))

        # Processing settings
        if os.getenv('CRYPT_IMAGES_COMPRESSION_LEVEL'):
            config.compression_level = int(os.getenv('CRYPT_IMAGES_COMPRESSION_LEVEL', '6'))

        if os.getenv('CRYPT_IMAGES_FAIL_FAST'):
            config.fail_fast = os.getenv('CRYPT_IMAGES_FAIL_FAST', 'true').lower() == 'true'

        # Concurrency settings
        if os.getenv('CRYPT_IMAGES_BUILD_WORKERS'):
            config.max_build_workers = int(os.getenv('CRYPT_IMAGES_BUILD_WORKERS', '4'))

        if os.getenv('CRYPT_IMAGES_PUBLISH_WORKERS'):
            config.max_publish_workers = int(os.getenv('CRYPT_IMAGES_PUBLISH_WORKERS', '16'))

        # Logging settings
        if os.getenv('CRYPT_IMAGES_LOG_LEVEL'):
            config.log_level = os.getenv('CRYPT_IMAGES_LOG_LEVEL', 'INFO').upper()

        return config

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir:
            errors.append("data_dir is required")

        if not self.catalog_file:
            errors.append("catalog_file is required")

        if not 0 <= self.compression_level <= 9:
            errors.append("compression_level must be between 0 and 9")

        if self.max_build_workers < 1:
            errors.append("max_build_workers must be at least 1")

        if self.max_publish_workers < 1:
            errors.append("max_publish_workers must be at least 1")

        if self.request_timeout <= 0:
            errors.append("request_timeout must be positive")

        if self.container_public_access not in (None, 'blob', 'container'):
            errors.append("container_public_access must be blob, container, or empty")

        if self.log_level.upper() not in ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']:
            errors.append("log_level must be DEBUG, INFO, WARNING, ERROR, or CRITICAL")

        return errors
