"""
YAML parser with validation for enrichment lookup configuration files.

Provides detailed error reporting with line numbers and a structural check
of the parsed document against the expected configuration keys.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from enrichment_lookup.errors import ConfigurationError


class YAMLParsingError(ConfigurationError):
    """Configuration YAML could not be parsed."""

    def __init__(self, message: str, file_path: Optional[Path] = None,
                 line_number: Optional[int] = None, column: Optional[int] = None):
        self.file_path = file_path
        self.line_number = line_number
        self.column = column

        error_parts = [message]

        if file_path:
            error_parts.append(f"File: {file_path}")

        if line_number is not None:
            if column is not None:
                error_parts.append(f"Line {line_number}, Column {column}")
            else:
                error_parts.append(f"Line {line_number}")

        super().__init__(" | ".join(error_parts))


EXPECTED_KEYS = {
    'log_level', 'collision_policy', 'fail_fast', 'output_format',
    'exclude_packages', 'options',
}

EXPECTED_OPTION_KEYS = {'enrichment_for', 'enrichment', 'by'}

# Spellings accepted for booleans substituted from the environment
BOOLEAN_STRINGS = {'1', '0', 'true', 'false', 'yes', 'no', 'on', 'off'}


def _is_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in BOOLEAN_STRINGS
    return isinstance(value, bool)


class ConfigurationYAMLParser:
    """YAML parser for configuration files with validation and error reporting."""

    def parse_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Parse a YAML configuration file.

        Raises:
            YAMLParsingError: If YAML is invalid or file cannot be read
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return self._load(f, file_path)
        except FileNotFoundError:
            raise YAMLParsingError("Configuration file not found", file_path)
        except PermissionError:
            raise YAMLParsingError("Permission denied reading configuration file", file_path)
        except UnicodeDecodeError as e:
            raise YAMLParsingError(f"File encoding error: {e}", file_path)

    def _load(self, stream, file_path: Optional[Path]) -> Dict[str, Any]:
        try:
            content = yaml.safe_load(stream)
        except yaml.YAMLError as e:
            line_number = None
            column = None

            if hasattr(e, 'problem_mark') and e.problem_mark:
                line_number = e.problem_mark.line + 1  # YAML marks are 0-based
                column = e.problem_mark.column + 1

            if hasattr(e, 'problem') and e.problem:
                message = f"YAML parsing error: {e.problem}"
            else:
                message = f"YAML parsing error: {str(e)}"

            raise YAMLParsingError(message, file_path, line_number, column)

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise YAMLParsingError("Configuration root must be a mapping", file_path)
        return content

    def validate_configuration_structure(self, config_dict: Dict[str, Any]) -> List[str]:
        """
        Validate configuration dictionary structure against expected keys and types.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        unknown_keys = set(config_dict.keys()) - EXPECTED_KEYS
        if unknown_keys:
            errors.append(f"Unknown configuration keys: {', '.join(sorted(unknown_keys))}")

        if 'fail_fast' in config_dict and not _is_boolean(config_dict['fail_fast']):
            errors.append("fail_fast must be a boolean")

        if 'exclude_packages' in config_dict:
            packages = config_dict['exclude_packages']
            if not isinstance(packages, list) or not all(isinstance(p, str) for p in packages):
                errors.append("exclude_packages must be a list of package names")

        if 'options' in config_dict:
            options = config_dict['options']
            if not isinstance(options, dict):
                errors.append("options must be a mapping")
            else:
                unknown_options = set(options.keys()) - EXPECTED_OPTION_KEYS
                if unknown_options:
                    errors.append(f"Unknown options keys: {', '.join(sorted(unknown_options))}")

        return errors
