"""Module for iterating generators through a replay-safe current/key/next
protocol without giving up the generator's send contract.
"""
import enum
import logging
from typing import (
    Any,
    Callable,
    Generator,
    Hashable,
    Iterable,
    Iterator,
    Optional,
    Tuple,
    Type,
)

from generatorplus.events import GeneratorEvent, GeneratorEventDispatcher, Observer
from generatorplus.exceptions import (
    DoubleSendNotAllowed,
    GeneratorNotExhausted,
    RewindNotAllowed,
    SendAfterExhaustion,
)
from generatorplus.handle import _GeneratorHandle

logger = logging.getLogger(__name__)


class _SendGuard(enum.Enum):
    IDLE = "IDLE"
    PENDING_SKIP = "PENDING_SKIP"


class GeneratorPlus:
    """Wrap a generator that was never started.

    Values and keys read through current() and key() are cached, so they can
    be read any number of times between two steps. Inside a for loop over the
    adapter, use send_in_foreach() rather than send(): the sent value already
    resumes the generator, so the loop's own step must not resume it again.
    """

    def __init__(self, generator: Generator) -> None:
        self._handle = _GeneratorHandle(generator)
        self._guard = _SendGuard.IDLE
        self._current: Any = None
        self._key: Optional[Hashable] = None
        self._sync()
        logger.debug("created %r", self)

    @classmethod
    def from_generator(cls, generator: Generator) -> "GeneratorPlus":
        return cls(generator)

    @classmethod
    def from_callable(cls, factory: Callable[[], Generator]) -> "GeneratorPlus":
        """Create from a callable, e.g. a generator function taking no
        arguments. The callable is invoked exactly once."""
        return cls(factory())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}<{self._handle!r}, {self._guard.name}>"

    def __reduce__(self):
        raise TypeError(f"cannot pickle {self.__class__.__name__!r} object")

    def _sync(self) -> None:
        self._current = self._handle.current
        self._key = self._handle.key

    def rewind(self) -> None:
        if self._handle.advanced:
            raise RewindNotAllowed(self._handle.position)
        self._sync()

    def valid(self) -> bool:
        return not self._handle.exhausted

    def current(self) -> Any:
        return self._current

    def key(self) -> Optional[Hashable]:
        return self._key

    def next(self) -> None:
        if self._guard is _SendGuard.PENDING_SKIP:
            # send_in_foreach already resumed the generator for this cycle
            self._guard = _SendGuard.IDLE
        else:
            self._handle.advance()
        self._sync()

    def send(self, value: Any) -> Any:
        """Send value to the generator and return what it yields next.

        Inside a for loop over this adapter the loop will also advance the
        generator, skipping an item; use send_in_foreach() there.
        """
        if not self.valid():
            raise SendAfterExhaustion(value)
        try:
            return self._handle.send(value)
        finally:
            self._sync()

    def send_in_foreach(self, value: Any) -> Any:
        """Send value once per iteration cycle of a for loop over this
        adapter. The following step of the loop will not advance the
        generator again."""
        if self._guard is _SendGuard.PENDING_SKIP:
            raise DoubleSendNotAllowed(self._key)
        response = self.send(value)
        self._guard = _SendGuard.PENDING_SKIP
        return response

    def get_return(self) -> Any:
        if self.valid():
            raise GeneratorNotExhausted()
        return self._handle.return_value

    def __iter__(self) -> Iterator[Any]:
        for _, value in self.items():
            yield value

    def items(self) -> Iterable[Tuple[Hashable, Any]]:
        """Iterate (key, value) pairs, driving rewind/valid/current/next
        like a for loop does."""
        self.rewind()
        while self.valid():
            yield self.key(), self.current()
            self.next()


class EventGeneratorPlus(GeneratorPlus):
    """A GeneratorPlus owning a dispatcher that its generator body can raise
    events through."""

    def __init__(
        self, generator: Generator, dispatcher: GeneratorEventDispatcher
    ) -> None:
        self._dispatcher = dispatcher
        super().__init__(generator)

    @classmethod
    def from_generator(  # type: ignore[override]
        cls, generator: Generator, dispatcher: GeneratorEventDispatcher
    ) -> "EventGeneratorPlus":
        """Wrap a generator that was built around dispatcher."""
        return cls(generator, dispatcher)

    @classmethod
    def from_callable(  # type: ignore[override]
        cls,
        factory: Callable[[GeneratorEventDispatcher], Generator],
        variants: Optional[Iterable[Type[GeneratorEvent]]] = None,
    ) -> "EventGeneratorPlus":
        """Create a fresh dispatcher, hand it to factory and wrap the returned
        generator. Events dispatched before the body's first yield are raised
        while this call runs, before any observer could be attached."""
        dispatcher = GeneratorEventDispatcher(variants)
        return cls(factory(dispatcher), dispatcher)

    @property
    def dispatcher(self) -> GeneratorEventDispatcher:
        return self._dispatcher

    def attach_event(self, variant: Type[GeneratorEvent], observer: Observer) -> None:
        self._dispatcher.attach(variant, observer)
