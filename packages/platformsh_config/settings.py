import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from dynaconf import Dynaconf

from .injection import GlobalInjector

ENVVAR_PREFIX = "PLATFORMSH_CONFIG"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "variable_prefix": "PLATFORM_",
    "strict_decoding": False,
    "log_level": "",
    "print_logging": False,
}


class ConfigService(ABC):
    """Library-level settings (not the platform environment itself).

    Keys:
        variable_prefix: Prefix of the platform variables, ``PLATFORM_`` by default
        strict_decoding: Raise on malformed base64 instead of degrading to empty
        log_level: One of error/warn/info/debug, empty to follow the logger
        print_logging: Echo formatted log lines to stdout
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def get_all(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    def initialize(
        self,
        settings_files: Optional[List[str]] = None,
        initial_config: Optional[Dict[str, Any]] = None,
    ) -> None:
        """(Re)load settings from files, ``PLATFORMSH_CONFIG_*`` variables and overrides."""
        pass


@GlobalInjector.singleton_autobind()
class DynaconfSettings(ConfigService):
    def __init__(self):
        """Settings are loaded lazily on first access unless initialize() is called."""
        self.dynaconf = None
        self._lock = threading.RLock()

    def initialize(
        self,
        settings_files: Optional[List[str]] = None,
        initial_config: Optional[Dict[str, Any]] = None,
    ) -> None:
        with self._lock:
            self.dynaconf = Dynaconf(
                settings_files=settings_files or [],
                environments=False,
                envvar_prefix=ENVVAR_PREFIX,
            )

            for key, value in DEFAULT_SETTINGS.items():
                if self.dynaconf.get(key) is None:
                    self.dynaconf.set(key, value)

            for key, value in (initial_config or {}).items():
                self.dynaconf.set(key, value)

    def _ensure_loaded(self):
        if self.dynaconf is None:
            self.initialize()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            self._ensure_loaded()
            return self.dynaconf.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._ensure_loaded()
            self.dynaconf.set(key, value)

    def get_all(self) -> Dict[str, Any]:
        with self._lock:
            self._ensure_loaded()
            return {key.lower(): value for key, value in self.dynaconf.as_dict().items()}
