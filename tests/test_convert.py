import datetime
import decimal
import math

import pytest
from querystore import convert as qsconvert


@pytest.mark.parametrize(
    "text,type_,expected",
    [
        ("1999", int, 1999),
        (" -42 ", int, -42),
        ("+7", int, 7),
        ("3.25", float, 3.25),
        ("-.5", float, -0.5),
        ("1e3", float, 1000.0),
        ("Infinity", float, math.inf),
        ("True", bool, True),
        (" false ", bool, False),
        ("12.50", decimal.Decimal, decimal.Decimal("12.50")),
        ("1,000.5", float, 1000.5),
        ("-12,345", float, -12345.0),
        ("1,2", decimal.Decimal, decimal.Decimal("12")),
        ("1,234,567.89", decimal.Decimal, decimal.Decimal("1234567.89")),
        ("2024-02-29", datetime.date, datetime.date(2024, 2, 29)),
        ("2024-02-29T13:45:00", datetime.datetime, datetime.datetime(2024, 2, 29, 13, 45)),
        ("anything", str, "anything"),
    ],
)
def test_convert(text, type_, expected):
    assert qsconvert.convert(text, type_) == expected


def test_nan():
    assert math.isnan(qsconvert.convert("NaN", float))


def test_rfc2822_datetime():
    value = qsconvert.convert("Tue, 15 Nov 1994 08:12:31 GMT", datetime.datetime)
    assert value.replace(tzinfo=None) == datetime.datetime(1994, 11, 15, 8, 12, 31)


@pytest.mark.parametrize(
    "text,type_",
    [
        ("notanumber", int),
        ("1_000", int),
        ("1.5", int),
        ("", int),
        ("nan", float),
        (",5", decimal.Decimal),
        ("1.000,5", float),
        ("yes", bool),
        ("1", bool),
        ("yesterday", datetime.datetime),
        ("2024-13-01", datetime.date),
    ],
)
def test_format_error(text, type_):
    with pytest.raises(qsconvert.FormatError) as info:
        qsconvert.convert(text, type_)
    assert info.value.value == text
    assert info.value.type is type_
    assert isinstance(info.value, ValueError)


def test_unregistered_type():
    with pytest.raises(TypeError):
        qsconvert.convert("1", complex)


def test_zero_values():
    registry = qsconvert.default_registry()
    assert registry.zero(int) == 0
    assert registry.zero(bool) is False
    assert registry.zero(datetime.datetime) == datetime.datetime.min


def test_register():
    registry = qsconvert.default_registry()
    registry.register(complex, complex, 0j)
    assert complex in registry
    assert registry.convert("1+2j", complex) == 1 + 2j
    assert complex not in qsconvert.converters


def test_copy_is_independent():
    registry = qsconvert.default_registry()
    copied = registry.copy()
    copied.register(int, lambda value: int(value, 16), 0)
    assert copied.convert("ff", int) == 255
    with pytest.raises(qsconvert.FormatError):
        registry.convert("ff", int)
