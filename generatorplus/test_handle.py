import pytest

from generatorplus.exceptions import RewindNotAllowed
from generatorplus.handle import Keyed, _GeneratorHandle, keyed


def _keys(*items):
    def gen():
        yield from items

    handle = _GeneratorHandle(gen())
    keys = []
    while not handle.exhausted:
        keys.append(handle.key)
        handle.advance()
    return keys


@pytest.mark.parametrize(
    "items,keys",
    [
        (("a", "b", "c"), [0, 1, 2]),
        ((keyed("a", 1), "b"), ["a", 0]),
        ((keyed(5, "x"), "y"), [5, 6]),
        (("x", keyed(10, "y"), "z", keyed(3, "w"), "v"), [0, 10, 11, 3, 12]),
        ((keyed(-5, "x"), "y"), [-5, 0]),
        ((keyed(True, "x"), "y"), [True, 0]),
        ((keyed("a", 1), keyed("a", 2)), ["a", "a"]),
    ],
)
def test_positional_keys(items, keys):
    assert _keys(*items) == keys


def test_tuples_are_values():
    def gen():
        yield ("a", 1)

    handle = _GeneratorHandle(gen())
    assert handle.key == 0
    assert handle.current == ("a", 1)


def test_priming_runs_to_first_yield():
    calls = []

    def gen():
        calls.append("started")
        yield keyed("a", 1)
        calls.append("resumed")

    handle = _GeneratorHandle(gen())
    assert calls == ["started"]
    assert not handle.advanced
    assert handle.position == 0
    assert (handle.key, handle.current) == ("a", 1)

    handle.advance()
    assert calls == ["started", "resumed"]
    assert handle.exhausted
    assert handle.advanced
    assert handle.return_value is None


def test_send_delivers_value_at_suspension_point():
    received = []

    def gen():
        received.append((yield 1))
        received.append((yield 2))
        return "done"

    handle = _GeneratorHandle(gen())
    assert handle.send("foo") == 2
    handle.advance()
    assert received == ["foo", None]
    assert handle.exhausted
    assert handle.current is None
    assert handle.key is None
    assert handle.return_value == "done"


def test_advance_after_exhaustion_is_noop():
    def gen():
        yield 1

    handle = _GeneratorHandle(gen())
    handle.advance()
    position = handle.position
    handle.advance()
    assert handle.exhausted
    assert handle.position == position


def test_started_generator_is_rejected():
    def gen():
        yield 1
        yield 2

    generator = gen()
    next(generator)
    with pytest.raises(RewindNotAllowed):
        _GeneratorHandle(generator)


def test_keyed_repr():
    assert repr(Keyed("a", 1)) == "Keyed<'a' => 1>"
