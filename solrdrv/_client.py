from __future__ import annotations

from ssl import SSLContext
from typing import TYPE_CHECKING, Any

from httpx import AsyncClient as HttpxAsyncClient

from solrdrv._collections import CollectionsAPI
from solrdrv._http_requests import AsyncHttpRequests
from solrdrv.collection import Collection
from solrdrv.errors import SolrUsageError
from solrdrv.json_handler import BuiltinHandler, JsonHandler
from solrdrv.types import JsonDict

if TYPE_CHECKING:  # pragma: no cover
    import sys
    from types import TracebackType

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self


class AsyncClient:
    """Async client to connect to a Solr server."""

    def __init__(
        self,
        scheme: str = "http",
        host: str = "localhost",
        port: int = 8983,
        *,
        timeout: int | None = None,
        verify: bool | SSLContext = True,
        auth: tuple[str, str] | None = None,
        custom_headers: dict[str, str] | None = None,
        json_handler: JsonHandler | None = None,
        http2: bool = False,
    ) -> None:
        """Class initializer.

        No request is made until a builder is committed.

        Args:
            scheme: The scheme Solr is served on, `http` or `https`. Defaults to http.
            host: The host name of the Solr server. Defaults to localhost.
            port: The port of the Solr server. Defaults to 8983.
            timeout: The amount of time in seconds that the client will wait for a response before
                timing out. Defaults to None.
            verify: SSL certificates (a.k.a CA bundle) used to
                verify the identity of requested hosts. Either `True` (default CA bundle),
                a path to an SSL certificate file, or `False` (disable verification)
            auth: Username and password for Solr's basic authentication plugin. Defaults to None.
            custom_headers: Custom headers to add when sending data to Solr. Defaults to None.
            json_handler: The module to use for json operations. The options are BuiltinHandler
                (uses the json module from the standard library), OrjsonHandler (uses orjson), or
                UjsonHandler (uses ujson). Note that in order use orjson or ujson the corresponding
                extra needs to be included. Default: BuiltinHandler.
            http2: Whether or not to use HTTP/2. Defaults to False.

        Raises:
            SolrUsageError: If the scheme or host is empty.
        """
        if not scheme or not host:
            raise SolrUsageError("scheme and host are required")

        self.scheme = scheme
        self.host = host
        self.port = port
        self.json_handler = json_handler if json_handler else BuiltinHandler()
        self.http_client = HttpxAsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=custom_headers,
            verify=verify,
            auth=auth,
            http2=http2,
        )
        self._http_requests = AsyncHttpRequests(self.http_client, json_handler=self.json_handler)

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}/solr"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        et: type[BaseException] | None,
        ev: type[BaseException] | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Closes the client.

        This only needs to be used if the client was not created with a context manager.
        """
        await self.http_client.aclose()

    def collections(self) -> CollectionsAPI:
        """Access to creating, listing and deleting collections.

        Examples:
            >>> from solrdrv import AsyncClient
            >>> async with AsyncClient("http", "localhost", 8983) as client:
            >>>     users = await client.collections().create("users").num_shards(2).commit()
        """
        return CollectionsAPI(self.http_client, json_handler=self.json_handler)

    def collection(self, name: str, *, hits_type: Any = JsonDict) -> Collection:
        """Create a handle to an existing collection.

        No request is made, so the collection is not checked for existence. Use
        `collections().get(name)` for that.

        Args:
            name: The name of the collection.
            hits_type: Allows for a custom type to be passed to use for search result documents.
                Defaults to JsonDict

        Examples:
            >>> from solrdrv import AsyncClient
            >>> async with AsyncClient("http", "localhost", 8983) as client:
            >>>     users = client.collection("users")
        """
        return Collection(
            self.http_client, name, json_handler=self.json_handler, hits_type=hits_type
        )

    async def get_system_info(self) -> JsonDict:
        """Get information about the Solr node, its version and JVM.

        Raises:
            SolrTransportError: If there was an error communicating with the server.
            SolrServerError: If Solr returned an error.
        """
        return await self._http_requests.get("admin/info/system", params={"wt": "json"})
