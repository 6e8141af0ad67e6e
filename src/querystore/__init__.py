from . import convert
from .convert import ConverterRegistry, FormatError, converters, default_registry
from .query import Query
from .store import Entry, QueryStore
