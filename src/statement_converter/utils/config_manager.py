"""Configuration management for the statement converter."""

import json
import os
import yaml
from typing import Dict, Any, Optional
import logging

from ..models.core import ConverterConfig, RecordFormat


logger = logging.getLogger(__name__)


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
VALID_REPORT_FORMATS = ['text', 'json']


class ConfigManager:
    """Manages loading and validation of converter configuration"""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager

        Args:
            config_path: Path to configuration file. If None, searches for default locations.
        """
        self.config_path = config_path
        self._config_cache: Optional[ConverterConfig] = None
        self.config_file: Optional[str] = None
        # Reason the last configuration file was rejected, if it was
        self.config_error: Optional[str] = None

    def load_config(self, force_reload: bool = False) -> ConverterConfig:
        """Load converter configuration from file or return default

        Args:
            force_reload: Force reload from file even if cached

        Returns:
            ConverterConfig instance with loaded or default configuration
        """
        if self._config_cache is not None and not force_reload:
            return self._config_cache

        self.config_error = None
        config_data = self._load_config_file()

        try:
            self._config_cache = ConverterConfig(
                log_directory=config_data.get('log_directory'),
                log_level=config_data.get('log_level', 'INFO'),
                default_input_format=config_data.get('default_input_format'),
                default_output_format=config_data.get('default_output_format'),
                report_format=config_data.get('report_format', 'text'),
                list_all_differences=config_data.get('list_all_differences', True)
            )
            logger.debug(f"Configuration loaded from {self.config_path or 'defaults'}")
            return self._config_cache

        except Exception as e:
            logger.warning(f"Error loading configuration: {e}. Using defaults.")
            self.config_error = str(e)
            self._config_cache = ConverterConfig()
            return self._config_cache

    def _load_config_file(self) -> Dict[str, Any]:
        """Load configuration from file

        Returns:
            Dictionary with configuration data or empty dict if no file found
        """
        config_file = self._find_config_file()
        self.config_file = config_file

        if not config_file or not os.path.exists(config_file):
            logger.debug("No configuration file found, using defaults")
            return {}

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.endswith('.json'):
                    data = json.load(f)
                elif config_file.endswith(('.yml', '.yaml')):
                    data = yaml.safe_load(f)
                else:
                    logger.warning(f"Unsupported config file format: {config_file}")
                    self.config_error = "unsupported file extension"
                    return {}

            self._validate_config_data(data)
            logger.debug(f"Configuration loaded from {config_file}")
            return data

        except Exception as e:
            logger.error(f"Error reading configuration file {config_file}: {e}")
            self.config_error = str(e)
            return {}

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations

        Returns:
            Path to configuration file or None if not found
        """
        if self.config_path:
            return self.config_path

        search_paths = [
            'converter_config.json',
            'converter_config.yml',
            'converter_config.yaml',
            'config/converter_config.json',
            'config/converter_config.yml',
            'config/converter_config.yaml',
            os.path.expanduser('~/.statement_converter/config.json'),
            os.path.expanduser('~/.statement_converter/config.yml'),
        ]

        for path in search_paths:
            if os.path.exists(path):
                return path

        return None

    def _validate_config_data(self, data: Dict[str, Any]) -> None:
        """Validate configuration data structure

        Args:
            data: Configuration data to validate

        Raises:
            ValueError: If configuration data is invalid
        """
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        log_directory = data.get('log_directory')
        if log_directory is not None:
            if not isinstance(log_directory, str) or not log_directory.strip():
                raise ValueError("log_directory must be a non-empty string or null")

        if 'log_level' in data:
            if str(data['log_level']).upper() not in VALID_LOG_LEVELS:
                raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}")

        for format_key in ['default_input_format', 'default_output_format']:
            if data.get(format_key) is not None:
                # Raises UnknownFormat, a ValueError
                RecordFormat.parse(data[format_key])

        if 'report_format' in data and data['report_format'] not in VALID_REPORT_FORMATS:
            raise ValueError(f"report_format must be one of {VALID_REPORT_FORMATS}")

        if 'list_all_differences' in data and not isinstance(data['list_all_differences'], bool):
            raise ValueError("list_all_differences must be a boolean")

    def save_config_template(self, output_path: str) -> None:
        """Generate and save a configuration file template

        Args:
            output_path: Path where to save the template
        """
        template = {
            "log_directory": "logs",
            "log_level": "INFO",
            "default_input_format": "csv",
            "default_output_format": "binary",
            "report_format": "text",
            "list_all_differences": True
        }

        try:
            output_dir = os.path.dirname(output_path)
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)

            with open(output_path, 'w', encoding='utf-8') as f:
                if output_path.lower().endswith(('.yml', '.yaml')):
                    yaml.dump(template, f, default_flow_style=False, indent=2)
                else:
                    json.dump(template, f, indent=2)

            logger.info(f"Configuration template saved to {output_path}")

        except Exception as e:
            logger.error(f"Error saving configuration template: {e}")
            raise

