"""Module for stepping a native generator as a keyed coroutine.

A generator body yields either bare values or Keyed items. Bare values are
given integer keys the same way a list would number them: one past the
largest integer key seen so far in that generator, starting at 0.
"""
import inspect
import logging
from typing import Any, Generator, Hashable, NamedTuple, Optional

from generatorplus.exceptions import RewindNotAllowed

logger = logging.getLogger(__name__)


class Keyed(NamedTuple):
    key: Hashable
    value: Any

    def __repr__(self) -> str:
        return f"Keyed<{self.key!r} => {self.value!r}>"


def keyed(key: Hashable, value: Any) -> Keyed:
    """Wrap a value so that it is yielded under an explicit key."""
    return Keyed(key=key, value=value)


def _is_int_key(key: Hashable) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


class _GeneratorHandle:
    def __init__(self, generator: Generator) -> None:
        if not inspect.isgenerator(generator):
            raise TypeError(f"cannot wrap {type(generator)}, expected a generator")
        if inspect.getgeneratorstate(generator) != inspect.GEN_CREATED:
            raise RewindNotAllowed()

        self._generator = generator
        self._current: Any = None
        self._key: Optional[Hashable] = None
        self._largest_int_key = -1
        self._position = 0
        self._exhausted = False
        self._return_value: Any = None

        # run the body up to its first suspension point
        self._resume(lambda: next(self._generator))

    def __repr__(self) -> str:
        state = "exhausted" if self._exhausted else f"at {self._key!r}"
        return f"Handle<{self._generator.__name__} {state}>"

    @property
    def current(self) -> Any:
        return self._current

    @property
    def key(self) -> Optional[Hashable]:
        return self._key

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def return_value(self) -> Any:
        return self._return_value

    @property
    def position(self) -> int:
        """Number of suspension points stepped past since priming."""
        return self._position

    @property
    def advanced(self) -> bool:
        return self._position > 0

    def advance(self) -> None:
        """Resume the body with None, like a for loop does."""
        if self._exhausted:
            return
        self._position += 1
        self._resume(lambda: next(self._generator))

    def send(self, value: Any) -> Any:
        """Inject value at the current suspension point and return the next
        yielded value, or None if the body returned."""
        self._position += 1
        self._resume(lambda: self._generator.send(value))
        return self._current

    def _resume(self, step) -> None:
        try:
            item = step()
        except StopIteration as stop:
            self._exhausted = True
            self._current = None
            self._key = None
            self._return_value = stop.value
            logger.debug("%s returned %r", self._generator.__name__, stop.value)
            return

        if isinstance(item, Keyed):
            key, value = item.key, item.value
            if _is_int_key(key) and key > self._largest_int_key:
                self._largest_int_key = key
        else:
            self._largest_int_key += 1
            key, value = self._largest_int_key, item
        self._key = key
        self._current = value
