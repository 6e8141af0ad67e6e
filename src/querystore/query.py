import typing as _ty
import uritools as _uritools

from . import utils as _utils

QueryValue: _ty.TypeAlias = "str | None"
QueryLike: _ty.TypeAlias = (
    "str | _ty.Sequence[tuple[str, QueryValue]] | _ty.Mapping[str, QueryValue | _ty.Sequence[QueryValue]]"
)


class Query(str):
    """An encoded query string, without the leading ``?``.

    Building one from pairs or a mapping encodes every key and value;
    ``decode`` goes the other way.
    """

    SEPARATOR = "&"
    ENCODING = "utf-8"

    def __new__(cls, query: QueryLike = None):
        if query is None:
            query = ""
        elif isinstance(query, str):
            query = query.removeprefix("?")
        else:
            if isinstance(query, _ty.Mapping):
                query = cls._pairs_from_mapping(query)
            query = cls.SEPARATOR.join(
                f"{cls.encode_component(key)}={cls.encode_component(value)}"
                for key, value in query
            )

        return str.__new__(cls, query)

    @classmethod
    def _pairs_from_mapping(cls, query: _ty.Mapping):
        for key, value in query.items():
            if _utils.is_sequence(value):
                for item in value:
                    yield key, item
            else:
                yield key, value

    @classmethod
    def encode_component(cls, text) -> str:
        text = _utils.as_text(text)
        if not text:
            return ""
        return _uritools.uriencode(text, "", cls.ENCODING).decode("ascii")

    @classmethod
    def decode_component(cls, text: str) -> str:
        if not text:
            return ""
        return _uritools.uridecode(text.replace("+", " "), cls.ENCODING, "replace")

    def decode(query) -> list[tuple[str, str]]:
        split = _uritools.SplitResultString("", "", "", str(query).replace("+", " "), "")
        return [
            (k, v or "")
            for k, v in split.getquerylist(query.SEPARATOR, query.ENCODING, "replace")
        ]

    def to_dict(query):
        query_: dict[str, list[str]] = {}
        for k, v in query.decode():
            query_.setdefault(k, []).append(v)
        return query_
