"""
Configuration Manager for the enrichment lookup.

This module handles loading, validation, and merging of configuration from multiple sources:
- System defaults
- User configuration (~/.enrichment-lookup/config.yaml)
- Project configuration (./.enrichment-lookup/config.yaml)
- Explicit configuration (--config file.yaml)
- Environment variables
- CLI arguments (highest precedence)
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from enrichment_lookup.errors import ConfigurationError
from .schema import CollisionPolicy, LogLevel, LookupConfig, OptionKeysConfig, OutputFormat
from .environment import EnvironmentVariables
from .yaml_parser import ConfigurationYAMLParser


logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".enrichment-lookup"


class ConfigurationManager:
    """Manages configuration loading, validation, and environment variable integration."""

    def __init__(self,
                 user_config_path: Optional[Path] = None,
                 project_config_path: Optional[Path] = None):
        self.user_config_path = user_config_path or Path.home() / CONFIG_DIR_NAME / "config.yaml"
        self.project_config_path = project_config_path or Path.cwd() / CONFIG_DIR_NAME / "config.yaml"
        self.yaml_parser = ConfigurationYAMLParser()

    def load_configuration(self,
                           config_file: Optional[str] = None,
                           cli_overrides: Optional[Dict[str, Any]] = None) -> LookupConfig:
        """
        Load configuration from all sources with proper precedence.

        Precedence order (highest to lowest):
        1. CLI arguments (cli_overrides)
        2. Environment variables
        3. Explicit config file (--config)
        4. Project config (./.enrichment-lookup/config.yaml)
        5. User config (~/.enrichment-lookup/config.yaml)
        6. System defaults

        Args:
            config_file: Optional explicit configuration file path
            cli_overrides: Dictionary of CLI argument overrides, None values are ignored

        Returns:
            LookupConfig: Merged and validated configuration

        Raises:
            ConfigurationError: If a file is invalid or the merged values are not supported
        """
        config_dict = self._get_default_config()

        if self.user_config_path.exists():
            logger.debug(f"Loading user configuration {self.user_config_path}")
            config_dict = self._merge_configs(config_dict, self._load_yaml_file(self.user_config_path))

        if self.project_config_path.exists():
            logger.debug(f"Loading project configuration {self.project_config_path}")
            config_dict = self._merge_configs(config_dict, self._load_yaml_file(self.project_config_path))

        if config_file:
            logger.debug(f"Loading configuration {config_file}")
            config_dict = self._merge_configs(config_dict, self._load_yaml_file(Path(config_file)))

        config_dict = self._merge_configs(config_dict, EnvironmentVariables.load_overrides())

        if cli_overrides:
            overrides = {k: v for k, v in cli_overrides.items() if v is not None}
            config_dict = self._merge_configs(config_dict, overrides)

        config_dict = self.substitute_environment_variables(config_dict)

        try:
            config = self._dict_to_config(config_dict)
        except TypeError as e:
            raise ConfigurationError(f"Failed to create configuration object: {e}")

        errors = config.validate()
        if errors:
            raise ConfigurationError(
                "Invalid configuration:\n" + "\n".join(f"  - {error}" for error in errors)
            )
        return config

    def substitute_environment_variables(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Substitute ${VAR} and ${VAR:-default} syntax with environment variable values.

        Raises:
            ConfigurationError: If a required environment variable is missing
        """
        pattern = r'\$\{([^}]+)\}'

        def replace_var(match):
            var_expr = match.group(1)

            if ':-' in var_expr:
                var_name, default_value = var_expr.split(':-', 1)
                return os.environ.get(var_name, default_value)

            if var_expr not in os.environ:
                raise ConfigurationError(f"Required environment variable '{var_expr}' is not set")
            return os.environ[var_expr]

        def substitute_recursive(obj):
            if isinstance(obj, dict):
                return {k: substitute_recursive(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [substitute_recursive(item) for item in obj]
            elif isinstance(obj, str):
                return re.sub(pattern, replace_var, obj)
            return obj

        return substitute_recursive(config_dict)

    def generate_default_config(self) -> str:
        """Generate default configuration YAML with comments."""
        defaults = self._get_default_config()
        policies = ", ".join(p.value for p in CollisionPolicy)
        formats = ", ".join(f.value for f in OutputFormat)
        levels = ", ".join(l.value for l in LogLevel)
        excluded = "\n".join(f"  - {package}" for package in defaults['exclude_packages'])
        options = defaults['options']
        return f"""# Enrichment Lookup Configuration

# Logging level ({levels})
log_level: {defaults['log_level']}

# Enrichments declared by several files ({policies})
collision_policy: {defaults['collision_policy']}

# Abort on the first invalid schema file instead of skipping it
fail_fast: {str(defaults['fail_fast']).lower()}

# Rendering of the enrichment map ({formats})
output_format: {defaults['output_format']}

# Packages never scanned for enrichments
exclude_packages:
{excluded}

# Annotation names
options:
  enrichment_for: {options['enrichment_for']}
  enrichment: {options['enrichment']}
  by: {options['by']}
"""

    def _get_default_config(self) -> Dict[str, Any]:
        """Get system default configuration values."""
        return {
            'log_level': LogLevel.INFO.value,
            'collision_policy': CollisionPolicy.LAST_WINS.value,
            'fail_fast': False,
            'output_format': OutputFormat.PROPERTIES.value,
            'exclude_packages': ["google.protobuf"],
            'options': {
                'enrichment_for': "enrichment_for",
                'enrichment': "enrichment",
                'by': "by",
            },
        }

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load a YAML configuration file, substitute variables and validate its structure."""
        config_dict = self.substitute_environment_variables(self.yaml_parser.parse_file(file_path))
        validation_errors = self.yaml_parser.validate_configuration_structure(config_dict)

        if validation_errors:
            raise ConfigurationError(
                f"Configuration validation errors in {file_path}:\n"
                + "\n".join(f"  - {error}" for error in validation_errors)
            )

        return config_dict

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> LookupConfig:
        """Convert configuration dictionary to LookupConfig object."""
        return LookupConfig(
            log_level=str(config_dict.get('log_level', LogLevel.INFO.value)).lower(),
            collision_policy=str(config_dict.get('collision_policy', CollisionPolicy.LAST_WINS.value)).lower(),
            fail_fast=_as_bool(config_dict.get('fail_fast', False)),
            output_format=str(config_dict.get('output_format', OutputFormat.PROPERTIES.value)).lower(),
            exclude_packages=list(config_dict.get('exclude_packages') or []),
            options=OptionKeysConfig(**config_dict.get('options', {})),
        )


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in EnvironmentVariables.TRUE_VALUES
    return bool(value)


def load_configuration(config_file: Optional[str] = None,
                       cli_overrides: Optional[Dict[str, Any]] = None) -> LookupConfig:
    """Convenience wrapper around `ConfigurationManager.load_configuration`."""
    return ConfigurationManager().load_configuration(config_file, cli_overrides)
