"""
Enrichment lookup configuration: schema, environment variables and the
layered configuration manager.
"""

from enrichment_lookup.config.schema import (
    CollisionPolicy,
    LogLevel,
    LookupConfig,
    OptionKeysConfig,
    OutputFormat,
)
from enrichment_lookup.config.manager import ConfigurationManager, load_configuration

__all__ = [
    "CollisionPolicy",
    "LogLevel",
    "LookupConfig",
    "OptionKeysConfig",
    "OutputFormat",
    "ConfigurationManager",
    "load_configuration",
]
