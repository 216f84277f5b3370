import pytest

from coupler.observers import DISPOSED, PULL, ObserverRegistry


def test_emit_calls_observers_in_registration_order():
    registry = ObserverRegistry()
    calls = []
    registry.register(PULL, lambda remaining: calls.append(("first", remaining)))
    registry.register(PULL, lambda remaining: calls.append(("second", remaining)))

    registry.emit(PULL, 3)

    assert calls == [("first", 3), ("second", 3)]


def test_emit_without_observers_is_a_noop():
    registry = ObserverRegistry()
    registry.emit(DISPOSED)
    assert registry.get(DISPOSED) == []


def test_register_rejects_unknown_events():
    registry = ObserverRegistry()
    with pytest.raises(ValueError, match="Unknown event"):
        registry.register("push", lambda: None)


def test_register_rejects_non_callables():
    registry = ObserverRegistry()
    with pytest.raises(TypeError):
        registry.register(DISPOSED, "not callable")


def test_observer_errors_propagate():
    registry = ObserverRegistry()

    def broken():
        raise RuntimeError("observer failed")

    registry.register(DISPOSED, broken)
    with pytest.raises(RuntimeError, match="observer failed"):
        registry.emit(DISPOSED)
