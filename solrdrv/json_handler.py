from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

from solrdrv.errors import SolrDecodeError

try:
    import orjson
except ImportError:  # pragma: nocover
    orjson = None  # type: ignore

try:
    import ujson
except ImportError:  # pragma: nocover
    ujson = None  # type: ignore


class _JsonHandler(ABC):
    @abstractmethod
    def dumps(self, obj: Any) -> str: ...

    @abstractmethod
    def loads(self, json_string: str | bytes | bytearray) -> Any: ...

    def decode(self, content: bytes, status_code: int | None = None) -> Any:
        """Decodes a Solr response body.

        Every handler raises some subclass of ValueError on bad input, this normalizes them
        into a SolrDecodeError.
        """
        if not content:
            raise SolrDecodeError("Empty response body", status_code)

        try:
            return self.loads(content)
        except ValueError as err:
            snippet = content[:200].decode("utf-8", errors="replace")
            raise SolrDecodeError(f"Response is not valid JSON: {snippet}", status_code) from err


class BuiltinHandler(_JsonHandler):
    def __init__(self, serializer: type[json.JSONEncoder] | None = None) -> None:
        """Uses the json module from the Python standard library.

        Args:
            serializer: A custom JSONEncode to handle serializing fields that the build in
                json.dumps cannot handle, for example UUID and datetime. It only applies to this
                handler. Defaults to None.
        """
        self.serializer = serializer

    def dumps(self, obj: Any) -> str:
        return json.dumps(obj, cls=self.serializer)

    def loads(self, json_string: str | bytes | bytearray) -> Any:
        return json.loads(json_string)


class OrjsonHandler(_JsonHandler):
    def __init__(self) -> None:
        if orjson is None:  # pragma: no cover
            raise ValueError("orjson must be installed to use the OrjsonHandler")

    def dumps(self, obj: Any) -> str:
        return orjson.dumps(obj).decode("utf-8")

    def loads(self, json_string: str | bytes | bytearray) -> Any:
        return orjson.loads(json_string)


class UjsonHandler(_JsonHandler):
    def __init__(self) -> None:
        if ujson is None:  # pragma: no cover
            raise ValueError("ujson must be installed to use the UjsonHandler")

    def dumps(self, obj: Any) -> str:
        return ujson.dumps(obj)

    def loads(self, json_string: str | bytes | bytearray) -> Any:
        return ujson.loads(json_string)


JsonHandler = BuiltinHandler | OrjsonHandler | UjsonHandler
