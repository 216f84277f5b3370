from typing import Callable, Dict, List

DISPOSED = "disposed"
PULL = "pull"


class ObserverRegistry:
    def __init__(self, events=(DISPOSED, PULL)):
        self._registry: Dict[str, List[Callable]] = {event: [] for event in events}

    def register(self, event: str, callback: Callable) -> Callable:
        if event not in self._registry:
            raise ValueError(f"Unknown event '{event}'.")
        if not callable(callback):
            raise TypeError(f"Observer for '{event}' must be callable, got {callback!r}")
        self._registry[event].append(callback)
        return callback

    def emit(self, event: str, *args) -> None:
        # copy: a callback may register further observers while we iterate
        for callback in list(self._registry[event]):
            callback(*args)

    def get(self, event: str) -> List[Callable]:
        return list(self._registry.get(event, []))

    def all(self) -> Dict[str, List[Callable]]:
        return self._registry


__all__ = ["ObserverRegistry", "DISPOSED", "PULL"]
