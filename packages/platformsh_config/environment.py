"""
Environment accessors.

The config builder never touches ``os.environ`` directly. It is handed an
``EnvironmentReader``: anything that maps a variable name to its string value,
returning ``""`` when the variable is not set. Plain mappings and callables such as
``os.getenv`` work as well.
"""

import os
from abc import ABC, abstractmethod
from typing import Callable, Mapping, Optional, Union

from .injection import GlobalInjector


class EnvironmentReader(ABC):
    @abstractmethod
    def get(self, name: str) -> str:
        """Return the value of ``name`` or an empty string when it is unset."""
        pass

    def __call__(self, name: str) -> str:
        return self.get(name)


@GlobalInjector.singleton_autobind()
class OsEnvironmentReader(EnvironmentReader):
    """Reads the live process environment."""

    def get(self, name: str) -> str:
        return os.environ.get(name, "")


class MappingEnvironmentReader(EnvironmentReader):
    """Reads a fixed snapshot, used for tests and local development."""

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values = dict(values or {})

    def get(self, name: str) -> str:
        value = self._values.get(name)
        return "" if value is None else str(value)


ReaderLike = Union[EnvironmentReader, Mapping[str, str], Callable[[str], Optional[str]]]


def as_reader(reader: ReaderLike) -> Callable[[str], str]:
    """Normalise a reader or bare callable so that unset values come back as ``""``."""
    if isinstance(reader, EnvironmentReader):
        return reader.get
    if isinstance(reader, Mapping):
        return MappingEnvironmentReader(reader).get

    def read(name: str) -> str:
        value = reader(name)
        return "" if value is None else value

    return read
