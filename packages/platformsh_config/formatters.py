"""
Credential formatter registry.

Formatters turn one ``Credential`` into whatever a client library wants (a DSN
string, a dict of keyword arguments, a URL). The registry is open: anyone can
register a formatter under a name and later ask a runtime config for
``formatted_credentials(relationship, name)``. Only ``sqldsn`` is built in.
"""

import threading
from typing import Any, Callable, Dict, List

from injector import inject

from .credentials import Credential
from .errors import FormatterNotFoundError
from .injection import GlobalInjector
from .log_provider import PythonLoggerProvider
from .signaling import SignalProvider

CredentialFormatter = Callable[[Credential], Any]


def sql_dsn_formatter(credential: Credential) -> str:
    """MySQL-proxy DSN, e.g. ``user:pass@tcp(host:3306)/main?charset=utf8``."""
    return (
        f"{credential.username}:{credential.password}"
        f"@tcp({credential.host}:{credential.port})/{credential.path}?charset=utf8"
    )


@GlobalInjector.singleton_autobind()
class FormatterRegistry:
    """
    Maps formatter names to ``Credential -> Any`` callables.

    Registration and lookup hold a single lock so formatters may be registered
    while other threads are formatting credentials. Registering an existing name
    replaces it (last registration wins).
    """

    @inject
    def __init__(self, logger_provider: PythonLoggerProvider, signal_provider: SignalProvider):
        self.logger = logger_provider.get_logger("FormatterRegistry")
        self._formatters: Dict[str, CredentialFormatter] = {}
        self._lock = threading.RLock()
        self.registered_signal = signal_provider.create_signal(
            "credentials.formatter_registered",
            doc="Emitted after a credential formatter is added or replaced",
        )
        self._register_builtin_formatters()

    def register_formatter(self, name: str, formatter: CredentialFormatter) -> None:
        with self._lock:
            replaced = name in self._formatters
            if replaced:
                self.logger.warning(f"Formatter '{name}' already registered, overwriting")
            self._formatters[name] = formatter

        self.logger.debug(f"Registered credential formatter: {name}")
        self.registered_signal.send(self, name=name, replaced=replaced)

    def get_formatter(self, name: str) -> CredentialFormatter:
        with self._lock:
            formatter = self._formatters.get(name)
            if formatter is None:
                available = ", ".join(self._formatters.keys())
                raise FormatterNotFoundError(
                    f"No such formatter: '{name}'. Available formatters: {available}."
                )
            return formatter

    def has_formatter(self, name: str) -> bool:
        with self._lock:
            return name in self._formatters

    def list_formatters(self) -> List[str]:
        with self._lock:
            return list(self._formatters.keys())

    def format(self, name: str, credential: Credential) -> Any:
        return self.get_formatter(name)(credential)

    def _register_builtin_formatters(self) -> None:
        self.register_formatter("sqldsn", sql_dsn_formatter)
