from . import (
    config,
    credentials,
    decoding,
    environment,
    errors,
    formatters,
    injection,
    log_provider,
    platform_log,
    routes,
    settings,
    signaling,
)
from .config import (
    BuildConfig,
    ConfigBuilder,
    RuntimeConfig,
    is_valid_platform,
    new_build_config,
    new_runtime_config,
)
from .credentials import Credential
from .environment import EnvironmentReader, MappingEnvironmentReader, OsEnvironmentReader
from .errors import (
    Base64DecodeError,
    CredentialsNotFoundError,
    DecodeError,
    FormatterNotFoundError,
    LookupMiss,
    NotValidPlatformError,
    PlatformConfigError,
    RouteNotFoundError,
)
from .formatters import FormatterRegistry, sql_dsn_formatter
from .routes import Route

__all__ = [
    "BuildConfig",
    "ConfigBuilder",
    "RuntimeConfig",
    "is_valid_platform",
    "new_build_config",
    "new_runtime_config",
    "Credential",
    "Route",
    "EnvironmentReader",
    "MappingEnvironmentReader",
    "OsEnvironmentReader",
    "FormatterRegistry",
    "sql_dsn_formatter",
    "PlatformConfigError",
    "NotValidPlatformError",
    "DecodeError",
    "Base64DecodeError",
    "LookupMiss",
    "CredentialsNotFoundError",
    "FormatterNotFoundError",
    "RouteNotFoundError",
]
