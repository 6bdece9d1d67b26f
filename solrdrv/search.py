from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from solrdrv._builder import BaseBuilder
from solrdrv._utils import encode_params
from solrdrv.errors import SolrDecodeError, SolrUsageError
from solrdrv.models.search import SearchResults
from solrdrv.types import ParamValue

if TYPE_CHECKING:  # pragma: no cover
    import sys

    from solrdrv.collection import Collection

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

# Longer encoded queries are sent as a form body instead of a query string.
MAX_GET_QUERY_LENGTH = 4096


class SearchBuilder(BaseBuilder):
    """Builds a request to the select handler of a collection.

    Values are passed to Solr as given. Only form encoding is applied, the query syntax itself is
    never checked or escaped.

    https://solr.apache.org/guide/solr/latest/query-guide/common-query-parameters.html
    """

    def __init__(self, collection: Collection) -> None:
        super().__init__()
        self.collection = collection
        self._params: dict[str, ParamValue | list[ParamValue]] = {}

    @property
    def params(self) -> dict[str, ParamValue | list[ParamValue]]:
        return {k: list(v) if isinstance(v, list) else v for k, v in self._params.items()}

    def _set(self, key: str, value: ParamValue) -> Self:
        self._ensure_accumulating()
        self._params[key] = value
        return self

    def _append(self, key: str, value: ParamValue) -> Self:
        self._ensure_accumulating()
        current = self._params.get(key)
        if current is None:
            self._params[key] = [value]
        elif isinstance(current, list):
            current.append(value)
        else:
            self._params[key] = [current, value]

        return self

    def query(self, q: str) -> Self:
        return self._set("q", q)

    def fl(self, fields: str) -> Self:
        """Comma separated list of the fields to return."""
        return self._set("fl", fields)

    def fields(self, fields: str) -> Self:
        return self.fl(fields)

    def sort(self, sort: str) -> Self:
        return self._set("sort", sort)

    def start(self, start: int) -> Self:
        return self._set("start", start)

    def rows(self, rows: int) -> Self:
        return self._set("rows", rows)

    def filter_query(self, filter_query: str) -> Self:
        """Adds a filter query. Can be called more than once, every `fq` is sent."""
        return self._append("fq", filter_query)

    def def_type(self, def_type: str) -> Self:
        return self._set("defType", def_type)

    def debug(self, debug: str) -> Self:
        return self._set("debug", debug)

    def explain_other(self, explain_other: str) -> Self:
        return self._set("explainOther", explain_other)

    def time_allowed(self, time_allowed: int) -> Self:
        return self._set("timeAllowed", time_allowed)

    def segment_terminate_early(self, segment_terminate_early: bool) -> Self:
        return self._set("segmentTerminateEarly", segment_terminate_early)

    def omit_header(self, omit_header: bool) -> Self:
        return self._set("omitHeader", omit_header)

    def cache(self, cache: bool) -> Self:
        return self._set("cache", cache)

    def log_params_list(self, log_params_list: str) -> Self:
        return self._set("logParamsList", log_params_list)

    def echo_params(self, echo_params: str) -> Self:
        return self._set("echoParams", echo_params)

    def cursor_mark(self, cursor_mark: str) -> Self:
        return self._set("cursorMark", cursor_mark)

    def facet_field(self, *fields: str) -> Self:
        self._set("facet", True)
        for field in fields:
            self._append("facet.field", field)

        return self

    def facet_query(self, facet_query: str) -> Self:
        self._set("facet", True)
        return self._append("facet.query", facet_query)

    def facet_limit(self, limit: int) -> Self:
        return self._set("facet.limit", limit)

    def facet_mincount(self, mincount: int) -> Self:
        return self._set("facet.mincount", mincount)

    def highlight(self, fields: str) -> Self:
        self._set("hl", True)
        return self._set("hl.fl", fields)

    def param(self, key: str, value: ParamValue) -> Self:
        """Sets any parameter that has no dedicated setter.

        `wt` is always sent as `json` and cannot be changed.
        """
        return self._set(key, value)

    async def commit(self) -> SearchResults:
        """Runs the query.

        Returns:
            The matching documents with `num_found` and `start`, plus facet, highlighting and debug
            sections when they were requested.

        Raises:
            SolrUsageError: If no query was set or the builder was already committed.
            SolrTransportError: If there was an error communicating with the server.
            SolrServerError: If Solr returned an error.
            SolrDecodeError: If the response has no `response` section, or the documents do not
                fit the collection's `hits_type`.

        Examples:
            >>> results = await users.search().query("age:21").fl("name,age").commit()
            >>> results.docs
        """
        self._ensure_accumulating()
        if "q" not in self._params:
            raise SolrUsageError("A query is required, set one with query()")
        self._consume()

        params = {**self._params, "wt": "json"}
        encoded = encode_params(params)
        http_requests = self.collection._http_requests
        if len(encoded) > MAX_GET_QUERY_LENGTH:
            result = await http_requests.post(
                self.collection._select_url,
                body=encoded,
                content_type="application/x-www-form-urlencoded",
            )
        else:
            result = await http_requests.get(self.collection._select_url, params=params)

        response = result.get("response")
        if not isinstance(response, dict):
            raise SolrDecodeError(f"No response section in results from {self.collection.name}")

        try:
            return SearchResults[self.collection.hits_type](  # type: ignore[name-defined]
                **response,
                facet_counts=result.get("facet_counts"),
                highlighting=result.get("highlighting"),
                debug=result.get("debug"),
                next_cursor_mark=result.get("nextCursorMark"),
            )
        except ValidationError as err:
            raise SolrDecodeError(
                f"Unexpected search results from {self.collection.name}: {err}"
            ) from err
