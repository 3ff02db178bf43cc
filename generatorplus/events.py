"""Module for broadcasting events raised from inside a generator body.

Each adapter owns its own dispatcher, so observers only ever see the events
of the one generator they attached to.
"""
import logging
from typing import Callable, Iterable, List, Optional, Type

from pyrsistent import pset, pvector
from pyrsistent.typing import PSet, PVector

from generatorplus.exceptions import UnknownEventVariant

logger = logging.getLogger(__name__)


class GeneratorEvent:  # pylint: disable=too-few-public-methods
    """Base class for events dispatched by generator bodies. Observers are
    matched on the exact event class, never on a base class."""

    def __repr__(self) -> str:
        repr_s = f"Event<{self.__class__.__name__}"
        if vars(self):
            repr_s += f" with data {vars(self)}"
        repr_s += ">"
        return repr_s


Observer = Callable[[GeneratorEvent], None]


class GeneratorEventDispatcher:
    def __init__(
        self, variants: Optional[Iterable[Type[GeneratorEvent]]] = None
    ) -> None:
        self._variants: Optional[PSet] = None
        if variants is not None:
            variants = tuple(variants)
            for variant in variants:
                self._check_variant_type(variant)
            self._variants = pset(variants)
        self._registrations: PVector = pvector()

    def __repr__(self) -> str:
        return f"Dispatcher<{len(self._registrations)} observers>"

    @property
    def variants(self) -> Optional[PSet]:
        """The closed set of event classes, or None if any is accepted."""
        return self._variants

    @staticmethod
    def _check_variant_type(variant: type) -> None:
        if not (isinstance(variant, type) and issubclass(variant, GeneratorEvent)):
            raise TypeError(f"{variant!r} is not a GeneratorEvent class")

    def _check_variant(self, variant: type) -> None:
        self._check_variant_type(variant)
        if self._variants is not None and variant not in self._variants:
            raise UnknownEventVariant(variant, self._variants)

    def attach(self, variant: Type[GeneratorEvent], observer: Observer) -> None:
        """Register observer for events of exactly this class."""
        self._check_variant(variant)
        if not callable(observer):
            raise TypeError(f"observer {observer!r} is not callable")
        self._registrations = self._registrations.append((variant, observer))
        logger.debug("attached %r to %s", observer, variant.__name__)

    def observers(self, variant: Type[GeneratorEvent]) -> List[Observer]:
        return [obs for var, obs in self._registrations if var is variant]

    def dispatch(self, event: GeneratorEvent) -> None:
        """Call every observer registered for the class of event, in the
        order they were attached. An observer raising stops the delivery and
        the error reaches the caller, usually the generator body."""
        if not isinstance(event, GeneratorEvent):
            raise TypeError(f"cannot dispatch {type(event)}")
        variant = type(event)
        if self._variants is not None and variant not in self._variants:
            raise UnknownEventVariant(variant, self._variants)

        # observers attached while dispatching only see later events
        registrations: PVector = self._registrations
        for registered, observer in registrations:
            if registered is variant:
                observer(event)
