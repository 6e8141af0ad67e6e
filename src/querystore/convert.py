import datetime as _dt
import decimal as _decimal
import re as _re
import typing as _ty

from . import utils as _utils

_T = _ty.TypeVar("_T")

_INTEGER = _re.compile(r"\s*[+-]?[0-9]+\s*", _re.ASCII)
_NUMBER = _re.compile(
    r"\s*[+-]?([0-9][0-9,]*\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?\s*", _re.ASCII
)
_SYMBOLS = {"NaN": "nan", "Infinity": "inf", "-Infinity": "-inf"}


class FormatError(ValueError):
    """Raised when a query value cannot be converted to the requested type."""

    def __init__(self, value: str | None, type_: type, reason: str | None = None):
        self.value = value
        self.type = type_
        message = f"{value!r} is not a valid {type_.__name__}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class Conversion(_ty.NamedTuple):
    parser: _ty.Callable[[str], _ty.Any]
    zero: _ty.Any


def _integer(value: str):
    if not _INTEGER.fullmatch(value):
        raise ValueError("expected an optionally signed run of digits")
    return int(value)


def _symbol_or_number(value: str):
    text = value.strip()
    if text in _SYMBOLS:
        return _SYMBOLS[text]
    if not _NUMBER.fullmatch(value):
        raise ValueError("expected a decimal number")
    # group separators are allowed in the integer part
    return text.replace(",", "")


def _float(value: str):
    return float(_symbol_or_number(value))


def _decimal_(value: str):
    return _decimal.Decimal(_symbol_or_number(value))


def _boolean(value: str):
    text = value.strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError("expected 'true' or 'false'")


def _datetime(value: str):
    text = value.strip()
    try:
        return _dt.datetime.fromisoformat(text)
    except ValueError:
        pass
    return _utils.parsedate(text)


def _date(value: str):
    text = value.strip()
    try:
        return _dt.date.fromisoformat(text)
    except ValueError:
        return _datetime(text).date()


class ConverterRegistry:
    """Maps target types to the function turning query text into them.

    Parsing is culture neutral: ``.`` is the only decimal separator and
    ``,`` groups digits in the integer part of floats and decimals.
    """

    __slots__ = ("_conversions",)

    def __init__(self, conversions: _ty.Mapping[type, Conversion] | None = None):
        self._conversions: dict[type, Conversion] = dict(conversions or {})

    def register(self, type_: type[_T], parser: _ty.Callable[[str], _T], zero: _T):
        self._conversions[type_] = Conversion(parser, zero)

    def copy(self):
        return type(self)(self._conversions)

    def __contains__(self, type_: type):
        return type_ in self._conversions

    def _lookup(self, type_: type) -> Conversion:
        try:
            return self._conversions[type_]
        except KeyError:
            raise TypeError(
                f"no conversion registered for {getattr(type_, '__name__', type_)!r}"
            ) from None

    def zero(self, type_: type[_T]) -> _T:
        return self._lookup(type_).zero

    def convert(self, value: str, type_: type[_T]) -> _T:
        conversion = self._lookup(type_)
        if value is None:
            raise FormatError(value, type_, "no value")
        try:
            return conversion.parser(value)
        except FormatError:
            raise
        except (ValueError, ArithmeticError) as error:
            raise FormatError(value, type_, str(error)) from error


def default_registry():
    registry = ConverterRegistry()
    registry.register(str, str, "")
    registry.register(int, _integer, 0)
    registry.register(float, _float, 0.0)
    registry.register(bool, _boolean, False)
    registry.register(_decimal.Decimal, _decimal_, _decimal.Decimal(0))
    registry.register(_dt.datetime, _datetime, _dt.datetime.min)
    registry.register(_dt.date, _date, _dt.date.min)
    return registry


converters = default_registry()


def convert(value: str, type_: type[_T]) -> _T:
    return converters.convert(value, type_)
