import logging
import typing as _ty

import uritools as _uritools

from . import convert as _convert, utils as _utils
from .query import Query, QueryLike

logger = logging.getLogger(__name__)

_T = _ty.TypeVar("_T")

_MISSING = object()


class Entry:
    """One key of a query together with every value added under it."""

    __slots__ = ("name", "values")

    JOINER = ","

    def __init__(self, name: str, values: _ty.Iterable[str] = ()):
        self.name = name
        self.values: list[str] = list(values)

    @property
    def value(self) -> str:
        return self.JOINER.join(self.values)

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return NotImplemented
        return self.name == other.name and self.values == other.values

    def __repr__(self):
        return "{}({!r}, {!r})".format(type(self).__name__, self.name, self.values)


def _check_converter(converter):
    if not callable(converter):
        raise TypeError("converter must be a callable taking the raw value")


class QueryStore:
    """A mutable, ordered, multi-valued view of a query string.

    Every key keeps the values added under it in order. Reading a key
    as a single string gives its values joined with commas; the
    ``get_values*`` methods give them one by one.
    """

    __slots__ = ("_entries", "_converters")

    def __init__(
        self,
        query: "QueryLike | QueryStore" = None,
        *,
        converters: _convert.ConverterRegistry = None,
    ):
        self._entries: dict[str, Entry] = {}
        self._converters = converters
        if query is None:
            return
        if isinstance(query, QueryStore):
            for entry in query.entries():
                self._entries[entry.name] = Entry(entry.name, entry.values)
            if converters is None:
                self._converters = query._converters
        elif isinstance(query, str):
            for name, value in Query(query).decode():
                self.add(name, value)
            logger.debug("parsed %d keys from %r", len(self._entries), query)
        elif isinstance(query, _ty.Mapping):
            for name, value in query.items():
                if _utils.is_sequence(value):
                    self._entry(name)
                    for item in value:
                        self.add(name, item)
                else:
                    self.add(name, value)
        else:
            for name, value in query:
                self.add(name, value)

    @classmethod
    def from_uri(cls, uri: str, **options):
        """Build a store from the query component of ``uri``."""
        return cls(_uritools.urisplit(uri).query or "", **options)

    @property
    def converters(self) -> _convert.ConverterRegistry:
        return self._converters if self._converters is not None else _convert.converters

    def copy(self):
        return type(self)(self)

    def _entry(self, name: str) -> Entry:
        entry = self._entries.get(name)
        if entry is None:
            entry = self._entries[name] = Entry(name)
        return entry

    def entries(self) -> _ty.Iterator[Entry]:
        """Yield a copy of every Entry, in order."""
        for entry in self._entries.values():
            yield Entry(entry.name, entry.values)

    # Single value access

    def get_value(self, name: str, default: str = _MISSING) -> str | None:
        """Return the values of ``name`` joined by commas.

        Without ``default`` a missing key gives None. With it, both a
        missing key and an empty value give ``default``.
        """
        entry = self._entries.get(name)
        value = entry.value if entry is not None else None
        if default is _MISSING or value:
            return value
        return default

    def name_exists(self, name: str) -> bool:
        return bool(self.get_value(name))

    def get_value_as(self, name: str, type_: type[_T], default: _T = _MISSING) -> _T:
        """Return the value of ``name`` converted to ``type_``.

        An empty or missing value gives the zero value of ``type_``, or
        ``default`` when one is given. A value that does not convert
        raises :class:`~querystore.convert.FormatError`, unless
        ``default`` is given, in which case ``default`` is returned.
        """
        converters = self.converters
        value = self.get_value(name)
        if not value:
            return converters.zero(type_) if default is _MISSING else default
        if default is _MISSING:
            return converters.convert(value, type_)
        try:
            return converters.convert(value, type_)
        except _convert.FormatError as error:
            logger.debug("using default for %r: %s", name, error)
            return default

    def get_value_with(
        self,
        name: str,
        converter: _ty.Callable[[str], _T],
        throw_on_error: bool = False,
        default: _T = None,
    ) -> _T:
        """Return the value of ``name`` passed through ``converter``.

        Errors raised by ``converter`` are replaced by ``default`` unless
        ``throw_on_error`` is set. An empty value only reaches
        ``converter`` when ``throw_on_error`` is set.
        """
        _check_converter(converter)
        value = self.get_value(name)
        if not value and not throw_on_error:
            return default
        try:
            return converter(value)
        except Exception as error:
            if throw_on_error:
                raise
            logger.debug("converter failed for %r: %r", name, error)
            return default

    # Multiple value access

    def get_values(self, name: str) -> list[str]:
        entry = self._entries.get(name)
        if entry is None:
            return []
        return list(entry.values)

    def get_values_as(
        self, name: str, type_: type[_T], default: _T = _MISSING
    ) -> list[_T]:
        """Convert every non-empty value of ``name`` to ``type_``.

        Values that do not convert are left out, or replaced by
        ``default`` when one is given.
        """
        converters = self.converters
        # unknown types fail even when there is nothing to convert
        converters.zero(type_)
        results: list[_T] = []
        for value in self.get_values(name):
            if not value:
                continue
            try:
                results.append(converters.convert(value, type_))
            except _convert.FormatError as error:
                logger.debug("skipping value of %r: %s", name, error)
                if default is not _MISSING:
                    results.append(default)
        return results

    def get_values_with(
        self,
        name: str,
        converter: _ty.Callable[[str], _T],
        throw_on_error: bool = False,
    ) -> list[_T]:
        _check_converter(converter)
        results: list[_T] = []
        for value in self.get_values(name):
            try:
                results.append(converter(value))
            except Exception as error:
                if throw_on_error:
                    raise
                logger.debug("converter failed for a value of %r: %r", name, error)
        return results

    # Mutation

    def add(self, name: str, value: _ty.Any):
        """Append ``value`` to the values of ``name``.

        None only makes sure the key exists.
        """
        entry = self._entry(name)
        value = _utils.as_text(value)
        if value is not None:
            entry.values.append(value)

    def add_or_replace(self, name: str, value: _ty.Any):
        entry = self._entry(name)
        value = _utils.as_text(value)
        entry.values = [] if value is None else [value]

    def remove(self, name: str):
        self._entries.pop(name, None)

    def remove_value(self, value: str) -> int:
        """Remove every key whose joined value equals ``value``.

        Returns how many keys were removed.
        """
        matches = [name for name, entry in self._entries.items() if entry.value == value]
        for name in matches:
            del self._entries[name]
        return len(matches)

    def clear(self):
        self._entries.clear()

    # Output

    def count(self) -> int:
        return len(self._entries)

    def to_query_string(self, remove_empty: bool = False, expand: bool = False) -> Query:
        """Encode the store as ``key=value`` pairs joined by ``&``.

        ``remove_empty`` leaves out keys whose value is empty. ``expand``
        writes one pair per value instead of the comma joined value.
        """
        pairs: list[tuple[str, str]] = []
        for entry in self._entries.values():
            value = entry.value
            if remove_empty and not value:
                continue
            if expand and len(entry.values) > 1:
                pairs.extend((entry.name, item) for item in entry.values)
            else:
                pairs.append((entry.name, value))
        return Query(pairs)

    def to_dict(self) -> dict[str, str]:
        return {name: entry.value for name, entry in self._entries.items()}

    def __len__(self):
        return len(self._entries)

    def __bool__(self):
        return bool(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __contains__(self, name: str):
        return name in self._entries

    def __eq__(self, other):
        if not isinstance(other, QueryStore):
            return NotImplemented
        return list(self._entries.values()) == list(other._entries.values())

    def __str__(self):
        return str(self.to_query_string())

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, str(self))
