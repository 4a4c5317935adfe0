from typing import Callable, List

from loguru import logger


class Signal:
    """
    Synchronous observer owned by a single object.

    ConfigManager uses one for `on_changed`; listeners receive the
    emitted arguments in connection order.
    """

    def __init__(self, name: str = "Signal"):
        self.name = name
        self._listeners: List[Callable] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def connect(self, listener: Callable) -> Callable[[], None]:
        """
        Add a listener (ignored if already connected).

        Returns:
            Zero-argument callable that disconnects the listener
        """
        if listener not in self._listeners:
            self._listeners.append(listener)
        return lambda: self.disconnect(listener)

    def disconnect(self, listener: Callable) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, *args, **kwargs) -> None:
        # Listeners may disconnect while being notified
        for listener in tuple(self._listeners):
            try:
                listener(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}': listener {listener!r} failed: {e}")
