"""Errors raised by generator adapters and their event dispatchers."""
from typing import Any, Optional


class GeneratorPlusError(Exception):
    """Base class for all errors raised by this package."""


class RewindNotAllowed(GeneratorPlusError, RuntimeError):
    """Represents an attempt to restart a generator that was already run."""

    def __init__(self, position: Optional[int] = None) -> None:
        super().__init__("cannot rewind a generator that was already run")
        self.position = position


class DoubleSendNotAllowed(GeneratorPlusError, RuntimeError):
    """Represents a second send_in_foreach within one iteration cycle."""

    def __init__(self, key: Any) -> None:
        super().__init__(
            f"a value was already sent at key {key!r}, "
            "advance the iteration before sending again"
        )
        self.key = key


class SendAfterExhaustion(GeneratorPlusError, RuntimeError):
    def __init__(self, value: Any) -> None:
        super().__init__(f"cannot send {value!r} to an exhausted generator")
        self.value = value


class GeneratorNotExhausted(GeneratorPlusError, RuntimeError):
    def __init__(self) -> None:
        super().__init__(
            "cannot get the return value of a generator that hasn't returned"
        )


class UnknownEventVariant(GeneratorPlusError, TypeError):
    """Represents an event class outside a dispatcher's closed variant set."""

    def __init__(self, variant: type, variants: Any) -> None:
        names = ", ".join(sorted(v.__name__ for v in variants))
        super().__init__(f"{variant.__name__} is not one of {names}")
        self.variant = variant
