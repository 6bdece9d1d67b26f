from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Callable

from httpx import AsyncClient, Response, TransportError
from loguru import logger

from solrdrv._utils import build_encoded_url
from solrdrv._version import VERSION
from solrdrv.errors import SolrDecodeError, SolrServerError, SolrTransportError
from solrdrv.json_handler import JsonHandler
from solrdrv.types import JsonDict, ParamValue

Params = Mapping[str, ParamValue | list[ParamValue]]


class AsyncHttpRequests:
    """Runs a single request against Solr and unwraps the response envelope.

    Every builder's `commit` ends here. One call to `get` or `post` is one HTTP request, nothing
    is retried or cached.
    """

    def __init__(self, http_client: AsyncClient, json_handler: JsonHandler) -> None:
        self.http_client = http_client
        self.json_handler = json_handler

    async def _send_request(
        self,
        http_method: Callable,
        url: str,
        body: Any | None = None,
        content_type: str = "application/json",
    ) -> Response:
        try:
            if body is None:
                response = await http_method(url)
            elif isinstance(body, (str, bytes, bytearray)):
                response = await http_method(
                    url, content=body, headers=build_headers(content_type)
                )
            else:
                response = await http_method(
                    url, content=self.json_handler.dumps(body), headers=build_headers(content_type)
                )
        except TransportError as err:
            raise SolrTransportError(str(err) or type(err).__name__) from err

        return response

    def parse_envelope(self, response: Response) -> JsonDict:
        """Decodes the body and raises if the envelope reports a failure.

        Returns:
            The decoded body without its `responseHeader`.

        Raises:
            SolrDecodeError: If the body is not a JSON object.
            SolrServerError: If the header status is non-zero, an `error` key is present, or the
                HTTP status is an error.
        """
        body = self.json_handler.decode(response.content, response.status_code)
        if not isinstance(body, dict):
            raise SolrDecodeError(
                f"Expected a JSON object, got {type(body).__name__}", response.status_code
            )

        header = body.pop("responseHeader", None) or {}
        if not isinstance(header, dict):
            raise SolrDecodeError(
                f"Expected responseHeader to be an object, got {type(header).__name__}",
                response.status_code,
            )

        status = header.get("status", 0)
        error = body.get("error")

        if error is not None:
            raise SolrServerError.from_error(error, response.status_code)

        if status != 0 or response.is_error:
            raise SolrServerError(
                f"Solr returned status {status or response.status_code}",
                code=status or response.status_code,
                status_code=response.status_code,
            )

        if "QTime" in header:
            logger.debug("QTime {}ms", header["QTime"])

        # TolerantUpdateProcessor reports rejected documents in the header
        if header.get("errors"):
            logger.warning("Solr rejected {} document(s)", len(header["errors"]))
            body.setdefault("errors", header["errors"])

        return body

    async def get(self, path: str, params: Params | None = None) -> JsonDict:
        url = build_encoded_url(path, params) if params else path
        logger.debug("GET {}", url)
        response = await self._send_request(self.http_client.get, url)

        return self.parse_envelope(response)

    async def post(
        self,
        path: str,
        body: Any | None = None,
        params: Params | None = None,
        content_type: str = "application/json",
    ) -> JsonDict:
        url = build_encoded_url(path, params) if params else path
        logger.debug("POST {}", url)
        response = await self._send_request(self.http_client.post, url, body, content_type)

        return self.parse_envelope(response)


def build_headers(content_type: str) -> dict[str, str]:
    return {"user-agent": user_agent(), "Content-Type": content_type}


@lru_cache(maxsize=1)
def user_agent() -> str:
    return f"solrdrv (v{VERSION})"
