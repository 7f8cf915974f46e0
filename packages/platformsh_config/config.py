"""
Build and runtime views of the platform environment.

``ConfigBuilder`` probes ``<PREFIX>APPLICATION_NAME``. When it is empty the
process is not running on the platform (local development, CI) and
``NotValidPlatformError`` is raised. Otherwise every plain variable is read
verbatim, the encoded ones are decoded, and an immutable config is returned:

- ``BuildConfig`` exposes what is meaningful while the application is built.
- ``RuntimeConfig`` adds everything that only exists once the application is
  deployed (branch, environment, relationships, routes, socket and port).

Usage:
    config = new_runtime_config()
    if config.on_production():
        dsn = config.formatted_credentials("database", "sqldsn")
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .credentials import Credential, Relationships, parse_relationships
from .decoding import decode_json_variable, decode_string_map, freeze, require_object
from .environment import EnvironmentReader, ReaderLike, as_reader
from .errors import CredentialsNotFoundError, NotValidPlatformError, RouteNotFoundError
from .formatters import CredentialFormatter, FormatterRegistry
from .injection import get_platform_service
from .log_provider import PythonLoggerProvider
from .routes import Route, Routes, parse_routes
from .settings import ConfigService
from .signaling import SignalProvider

BUILD = "build"
RUNTIME = "runtime"

_EMPTY: Mapping = MappingProxyType({})


@dataclass(frozen=True)
class PlatformValues:
    """Everything read from the environment, decoded once at construction."""

    prefix: str
    application_name: str
    app_dir: str = ""
    document_root: str = ""
    tree_id: str = ""
    branch: str = ""
    environment: str = ""
    project: str = ""
    project_entropy: str = ""
    smtp_host: str = ""
    mode: str = ""
    socket: str = ""
    port: str = ""
    relationships: Relationships = field(default_factory=lambda: _EMPTY)
    variables: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    routes: Routes = field(default_factory=lambda: _EMPTY)
    application: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)


class BuildConfig:
    def __init__(self, values: PlatformValues):
        self._values = values

    def __repr__(self):
        return (
            f"{type(self).__name__}(application_name={self.application_name!r}, "
            f"environment={self._values.environment!r})"
        )

    @property
    def prefix(self) -> str:
        return self._values.prefix

    @property
    def application_name(self) -> str:
        return self._values.application_name

    @property
    def app_dir(self) -> str:
        return self._values.app_dir

    @property
    def tree_id(self) -> str:
        return self._values.tree_id

    @property
    def project(self) -> str:
        return self._values.project

    @property
    def project_entropy(self) -> str:
        return self._values.project_entropy

    def is_valid_platform(self) -> bool:
        # A config only exists once the sentinel variable was found
        return True

    def in_build(self) -> bool:
        """Build hooks run before an environment tier is assigned."""
        return self._values.environment == ""

    def on_enterprise(self) -> bool:
        return self._values.mode == "enterprise"

    def on_production(self) -> bool:
        if self.in_build():
            return False

        prod_branch = "production" if self.on_enterprise() else "master"
        return self._values.branch == prod_branch

    def variable(self, name: str, default: str = "") -> str:
        return self._values.variables.get(name, default)

    def variables(self) -> Mapping[str, str]:
        return self._values.variables

    def application(self) -> Mapping[str, Any]:
        return self._values.application


class RuntimeConfig(BuildConfig):
    def __init__(self, values: PlatformValues, formatters: FormatterRegistry):
        super().__init__(values)
        self._formatters = formatters

    @property
    def branch(self) -> str:
        return self._values.branch

    @property
    def environment(self) -> str:
        return self._values.environment

    @property
    def document_root(self) -> str:
        return self._values.document_root

    @property
    def smtp_host(self) -> str:
        return self._values.smtp_host

    @property
    def mode(self) -> str:
        return self._values.mode

    @property
    def socket(self) -> str:
        return self._values.socket

    @property
    def port(self) -> str:
        return self._values.port

    def relationships(self) -> Relationships:
        return self._values.relationships

    def has_relationship(self, name: str) -> bool:
        return name in self._values.relationships

    def credentials(self, relationship: str, index: int = 0) -> Credential:
        """Return one endpoint of a relationship, the primary one by default."""
        if relationship not in self._values.relationships:
            raise CredentialsNotFoundError(f"No such relationship defined: {relationship}.")

        endpoints = self._values.relationships[relationship]
        if not 0 <= index < len(endpoints):
            if not endpoints:
                raise CredentialsNotFoundError(f"Relationship {relationship} has no endpoints.")
            raise CredentialsNotFoundError(
                f"Relationship {relationship} has no endpoint at index {index}."
            )
        return endpoints[index]

    def register_formatter(self, name: str, formatter: CredentialFormatter) -> "RuntimeConfig":
        self._formatters.register_formatter(name, formatter)
        return self

    def formatted_credentials(self, relationship: str, formatter: str) -> Any:
        """
        Format the first endpoint of ``relationship`` with a registered formatter.

        Raises:
            FormatterNotFoundError: The formatter was never registered
            CredentialsNotFoundError: The relationship is missing or has no endpoints
        """
        format_credential = self._formatters.get_formatter(formatter)
        return format_credential(self.credentials(relationship))

    def sql_dsn(self, relationship: str) -> str:
        return self.formatted_credentials(relationship, "sqldsn")

    def routes(self) -> Routes:
        return self._values.routes

    def route(self, route_id: str) -> Route:
        for route in self._values.routes.values():
            if route.id == route_id:
                return route
        raise RouteNotFoundError(f"No such route id found: {route_id}.")


class ConfigBuilder:
    def __init__(
        self,
        reader: Optional[ReaderLike] = None,
        prefix: Optional[str] = None,
        strict: Optional[bool] = None,
        formatters: Optional[FormatterRegistry] = None,
        settings: Optional[ConfigService] = None,
        logger_provider: Optional[PythonLoggerProvider] = None,
        signal_provider: Optional[SignalProvider] = None,
    ):
        self.settings = settings or get_platform_service(ConfigService)
        if reader is None:
            reader = get_platform_service(EnvironmentReader)
        self.read = as_reader(reader)
        self.prefix = self.settings.get("variable_prefix") if prefix is None else prefix
        self.strict = bool(self.settings.get("strict_decoding")) if strict is None else strict
        self.formatters = formatters
        self.logger = (logger_provider or get_platform_service(PythonLoggerProvider)).get_logger(
            "ConfigBuilder", prefix=self.prefix
        ).with_pattern("%p: (%c) [%x{prefix}] %m")
        signals = signal_provider or get_platform_service(SignalProvider)
        self.loaded_signal = signals.create_signal(
            "config.loaded", doc="Emitted after a build or runtime config is constructed"
        )
        self.degraded_signal = signals.create_signal(
            "config.decode_degraded",
            doc="Emitted when malformed base64 is replaced with an empty document",
        )

    def is_valid_platform(self) -> bool:
        return self.read(self.prefix + "APPLICATION_NAME") != ""

    def build(self, context: str = RUNTIME) -> BuildConfig:
        if context not in (BUILD, RUNTIME):
            raise ValueError(f"Unknown config context: '{context}'")

        values = self.extract()
        if context == BUILD:
            config = BuildConfig(values)
        else:
            formatters = self.formatters or get_platform_service(FormatterRegistry)
            config = RuntimeConfig(values, formatters)

        self.logger.debug(
            f"Loaded {context} config for application '{values.application_name}' "
            f"(environment='{values.environment}', relationships={len(values.relationships)}, "
            f"variables={len(values.variables)})"
        )
        self.loaded_signal.send(self, config=config, context=context)
        return config

    def extract(self) -> PlatformValues:
        """Read every variable. Raises before anything is returned when one is unusable."""
        p = self.prefix

        application_name = self.read(p + "APPLICATION_NAME")
        if application_name == "":
            self.logger.debug(f"{p}APPLICATION_NAME is not set, not a platform environment")
            raise NotValidPlatformError()

        return PlatformValues(
            prefix=p,
            application_name=application_name,
            app_dir=self.read(p + "APP_DIR"),
            document_root=self.read(p + "DOCUMENT_ROOT"),
            tree_id=self.read(p + "TREE_ID"),
            branch=self.read(p + "BRANCH"),
            environment=self.read(p + "ENVIRONMENT"),
            project=self.read(p + "PROJECT"),
            project_entropy=self.read(p + "PROJECT_ENTROPY"),
            smtp_host=self.read(p + "SMTP_HOST"),
            mode=self.read(p + "MODE"),
            socket=self.read("SOCKET"),
            port=self.read("PORT"),
            relationships=self._decode(p + "RELATIONSHIPS", parse_relationships),
            variables=self._decode_variables(p + "VARIABLES"),
            routes=self._decode(p + "ROUTES", parse_routes),
            application=self._decode(p + "APPLICATION", self._parse_application),
        )

    def _decode(self, variable: str, parse):
        try:
            document = decode_json_variable(
                variable, self.read(variable), strict=self.strict, on_degraded=self._on_degraded
            )
            return parse(variable, document)
        except ValueError as e:
            self.logger.error(str(e))
            raise

    def _decode_variables(self, variable: str) -> Mapping[str, str]:
        try:
            values = decode_string_map(
                variable, self.read(variable), strict=self.strict, on_degraded=self._on_degraded
            )
        except ValueError as e:
            self.logger.error(str(e))
            raise
        return MappingProxyType(values)

    @staticmethod
    def _parse_application(variable: str, document: Any) -> Mapping[str, Any]:
        return freeze(require_object(variable, document))

    def _on_degraded(self, variable: str, error: Exception):
        self.logger.warning(f"{variable} is not valid base64 ({error}), treating it as empty")
        self.degraded_signal.send(self, variable=variable, error=error)


def new_build_config(
    reader: Optional[ReaderLike] = None, prefix: Optional[str] = None, strict: Optional[bool] = None
) -> BuildConfig:
    """Config for build hooks. Raises ``NotValidPlatformError`` off-platform."""
    return ConfigBuilder(reader, prefix, strict).build(BUILD)


def new_runtime_config(
    reader: Optional[ReaderLike] = None, prefix: Optional[str] = None, strict: Optional[bool] = None
) -> RuntimeConfig:
    """Config for the running application. Raises ``NotValidPlatformError`` off-platform."""
    return ConfigBuilder(reader, prefix, strict).build(RUNTIME)


def is_valid_platform(reader: Optional[ReaderLike] = None, prefix: Optional[str] = None) -> bool:
    return ConfigBuilder(reader, prefix).is_valid_platform()
