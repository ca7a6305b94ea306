"""Wrappers that add a constraint or a keyword state to another value type."""

from ..syntax.parsing import ComponentStream

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Protocol, runtime_checkable, TypeVar

@runtime_checkable
class Numeric(Protocol):
    """Values with a notion of sign and magnitude.

    Implementations also offer `zero()` and `one()` class methods returning their identity elements.
    """
    def is_zero(self) -> bool: raise NotImplementedError
    def is_negative(self) -> bool: raise NotImplementedError
    def is_infinite(self) -> bool: raise NotImplementedError

N = TypeVar('N', bound=Numeric)
V = TypeVar('V')

@dataclass(frozen=True, slots=True, order=True)
class NonNegative(Generic[N]):
    """A numeric value that its parser guaranteed not to be negative."""
    value: N
    def is_zero(self) -> bool:
        return self.value.is_zero()
    def is_negative(self) -> bool:
        return self.value.is_negative()
    def is_infinite(self) -> bool:
        return self.value.is_infinite()
    def __float__(self) -> float:
        return float(self.value) # type: ignore

@dataclass(frozen=True, slots=True)
class MaybeAuto(Generic[V]):
    """A value that may also be the `auto` keyword, represented by `value` being `None`.

    `auto` is not a number, so `is_zero`, `is_negative` and `is_infinite` are all false for it whatever the wrapped type.
    """
    value: V | None = None
    @classmethod
    def auto(cls) -> 'MaybeAuto[V]':
        return cls()
    @classmethod
    def zero(cls, type: type) -> 'MaybeAuto':
        """Return the non-`auto` zero of the numeric `type`, e.g. `MaybeAuto.zero(Number)`."""
        return cls(type.zero())
    @classmethod
    def one(cls, type: type) -> 'MaybeAuto':
        return cls(type.one())
    @property
    def is_auto(self) -> bool:
        return self.value is None
    def non_auto(self) -> V | None:
        return self.value
    def auto_eval(self, func: Callable[[], V]) -> V:
        """Return the wrapped value, or what `func` returns in the case of `auto`."""
        return func() if self.value is None else self.value
    def is_zero(self) -> bool:
        return self.value is not None and self.value.is_zero() # type: ignore
    def is_negative(self) -> bool:
        return self.value is not None and self.value.is_negative() # type: ignore
    def is_infinite(self) -> bool:
        return self.value is not None and self.value.is_infinite() # type: ignore
    @classmethod
    def parse_with(cls, input: ComponentStream, parse: Callable[[ComponentStream], V]) -> 'MaybeAuto[V]':
        """Parse `auto`, or else a value with `parse`."""
        if input.try_parse(lambda input: input.expect_ident_matching('auto')) is not None:
            return cls.auto()
        return cls(parse(input))
