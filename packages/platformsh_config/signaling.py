"""In-process signals for observable configuration events.

Signals emitted by this package:
    config.loaded: A build or runtime config was constructed
        Payload: {config, context}
    config.decode_degraded: Malformed base64 was replaced with an empty document
        Payload: {variable, error}
    credentials.formatter_registered: A credential formatter was added or replaced
        Payload: {name, replaced}
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, Tuple

from blinker import ANY, Namespace

from .injection import GlobalInjector


class Signal(ABC):
    @abstractmethod
    def connect(self, receiver: Callable, sender: Any = None, weak: bool = True) -> Any:
        """Connect ``receiver(sender, **payload)``; ``sender=None`` listens to every sender."""
        pass

    @abstractmethod
    def disconnect(self, receiver: Callable, sender: Any = None) -> None:
        pass

    @abstractmethod
    def send(self, sender: Any, **kwargs) -> List[Tuple[Callable, Any]]:
        pass

    @abstractmethod
    @contextmanager
    def connected_to(self, receiver: Callable, sender: Any = None):
        """Keep ``receiver`` connected only inside the ``with`` block."""
        pass


class SignalProvider(ABC):
    @abstractmethod
    def create_signal(self, name: str, doc: Optional[str] = None) -> Signal:
        """Create a named signal, or return the existing one with that name."""
        pass

    @abstractmethod
    def get_signal(self, name: str) -> Optional[Signal]:
        pass


class BlinkerSignalWrapper(Signal):
    def __init__(self, blinker_signal):
        self._signal = blinker_signal

    def connect(self, receiver: Callable, sender: Any = None, weak: bool = True) -> Any:
        return self._signal.connect(receiver, sender=ANY if sender is None else sender, weak=weak)

    def disconnect(self, receiver: Callable, sender: Any = None) -> None:
        self._signal.disconnect(receiver, sender=ANY if sender is None else sender)

    def send(self, sender: Any, **kwargs) -> List[Tuple[Callable, Any]]:
        return self._signal.send(sender, **kwargs)

    @contextmanager
    def connected_to(self, receiver: Callable, sender: Any = None):
        with self._signal.connected_to(receiver, sender=ANY if sender is None else sender):
            yield


@GlobalInjector.singleton_autobind()
class BlinkerSignalProvider(SignalProvider):
    def __init__(self):
        self._namespace = Namespace()
        self._signals: Dict[str, BlinkerSignalWrapper] = {}

    def create_signal(self, name: str, doc: Optional[str] = None) -> Signal:
        if name in self._signals:
            return self._signals[name]

        wrapped = BlinkerSignalWrapper(self._namespace.signal(name, doc=doc))
        self._signals[name] = wrapped
        return wrapped

    def get_signal(self, name: str) -> Optional[Signal]:
        return self._signals.get(name)
