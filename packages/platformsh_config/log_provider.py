from abc import ABC, abstractmethod

from injector import inject

from .injection import GlobalInjector
from .platform_log import PlatformLogger
from .settings import ConfigService


class PythonLoggerProvider(ABC):
    @abstractmethod
    def get_logger(self, name: str, **context):
        pass


@GlobalInjector.singleton_autobind()
class StandardLoggerProvider(PythonLoggerProvider):
    @inject
    def __init__(self, config: ConfigService):
        self.config = config

    def get_logger(self, name: str, **context):
        return PlatformLogger(name, config=self.config, context=context)
