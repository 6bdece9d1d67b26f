from __future__ import annotations

from typing import Generic, TypeVar

from camel_converter.pydantic_base import CamelBase
from pydantic import Field

from solrdrv.types import JsonDict

T = TypeVar("T")


class SearchResults(CamelBase, Generic[T]):
    docs: list[T]
    num_found: int
    start: int = 0
    num_found_exact: bool | None = None
    max_score: float | None = None
    facet_counts: JsonDict | None = Field(None, alias="facet_counts")
    highlighting: JsonDict | None = None
    debug: JsonDict | None = None
    next_cursor_mark: str | None = None
