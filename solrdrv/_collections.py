from __future__ import annotations

from typing import TYPE_CHECKING, Any

from httpx import AsyncClient as HttpxAsyncClient

from solrdrv._builder import BaseBuilder
from solrdrv._http_requests import AsyncHttpRequests
from solrdrv.collection import Collection
from solrdrv.errors import (
    CollectionNotFoundError,
    SolrDecodeError,
    SolrServerError,
    SolrUsageError,
)
from solrdrv.json_handler import BuiltinHandler, JsonHandler
from solrdrv.types import JsonDict, ParamValue

if TYPE_CHECKING:  # pragma: no cover
    import sys

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

COLLECTIONS_ADMIN_URL = "admin/collections"
RESERVED_CREATE_PARAMS = frozenset(("action", "name", "wt"))


class CollectionsAPI:
    """Entry point to the Collections API.

    https://solr.apache.org/guide/solr/latest/deployment-guide/collection-management.html
    """

    def __init__(self, http_client: HttpxAsyncClient, json_handler: JsonHandler | None = None):
        self.http_client = http_client
        self._json_handler = json_handler if json_handler else BuiltinHandler()
        self._http_requests = AsyncHttpRequests(http_client, json_handler=self._json_handler)

    def _collection(self, name: str, hits_type: Any = JsonDict) -> Collection:
        return Collection(
            self.http_client, name, json_handler=self._json_handler, hits_type=hits_type
        )

    def create(self, name: str, *, hits_type: Any = JsonDict) -> CollectionBuilder:
        """Starts the definition of a new collection.

        Args:
            name: The name of the collection.
            hits_type: Document type used for search results of the created collection.
                Defaults to JsonDict.

        Examples:
            >>> from solrdrv import AsyncClient
            >>> async with AsyncClient("http", "localhost", 8983) as client:
            >>>     users = await (
            >>>         client.collections()
            >>>         .create("users")
            >>>         .router_field("id")
            >>>         .num_shards(16)
            >>>         .max_shards_per_node(16)
            >>>         .commit()
            >>>     )
        """
        return CollectionBuilder(self, name, hits_type=hits_type)

    async def list(self) -> list[Collection]:
        """Lists every collection in the cluster.

        Raises:
            SolrTransportError: If there was an error communicating with the server.
            SolrServerError: If Solr returned an error.
            SolrDecodeError: If the response has no collection list.
        """
        result = await self._http_requests.get(
            COLLECTIONS_ADMIN_URL, params={"action": "LIST", "wt": "json"}
        )
        names = result.get("collections")
        if not isinstance(names, list):
            raise SolrDecodeError("No collections in LIST response")

        return [self._collection(str(x)) for x in names]

    async def get(self, name: str, *, hits_type: Any = JsonDict) -> Collection:
        """Gets an existing collection.

        Raises:
            CollectionNotFoundError: If no collection with that name exists.
        """
        collections = await self.list()
        if name not in {x.name for x in collections}:
            raise CollectionNotFoundError(f"Collection {name} does not exist")

        return self._collection(name, hits_type)

    async def delete(self, name: str) -> None:
        await self._collection(name).delete()


class CollectionBuilder(BaseBuilder):
    """Accumulates the parameters of a collection CREATE call.

    Values are not checked locally, Solr rejects the ones it does not accept.
    """

    def __init__(self, api: CollectionsAPI, name: str, *, hits_type: Any = JsonDict) -> None:
        super().__init__()
        self.api = api
        self.name = name
        self.hits_type = hits_type
        self._params: dict[str, ParamValue] = {}

    @property
    def params(self) -> dict[str, ParamValue]:
        return {"action": "CREATE", "name": self.name, **self._params, "wt": "json"}

    def _set(self, key: str, value: ParamValue) -> Self:
        self._ensure_accumulating()
        self._params[key] = value
        return self

    def router_field(self, router_field: str) -> Self:
        """Sets the name of the field used to compute a document's shard hash."""
        return self._set("router.field", router_field)

    def router_name(self, router_name: str) -> Self:
        return self._set("router.name", router_name)

    def num_shards(self, num_shards: int) -> Self:
        return self._set("numShards", num_shards)

    def max_shards_per_node(self, max_shards_per_node: int) -> Self:
        return self._set("maxShardsPerNode", max_shards_per_node)

    def replication_factor(self, replication_factor: int) -> Self:
        return self._set("replicationFactor", replication_factor)

    def config_name(self, config_name: str) -> Self:
        """Sets the configset to use, `collection.configName` in Solr."""
        return self._set("collection.configName", config_name)

    def shards(self, shards: str) -> Self:
        """Comma separated shard names, for the implicit router."""
        return self._set("shards", shards)

    def param(self, key: str, value: ParamValue) -> Self:
        """Sets any CREATE parameter that has no dedicated setter.

        Raises:
            SolrUsageError: If the key is `action`, `name` or `wt`, which the builder controls.
        """
        if key in RESERVED_CREATE_PARAMS:
            raise SolrUsageError(f"{key} cannot be set with param()")

        return self._set(key, value)

    async def commit(self) -> Collection:
        """Creates the collection.

        Returns:
            A Collection handle for the new collection.

        Raises:
            SolrUsageError: If the name is empty or the builder was already committed.
            SolrTransportError: If there was an error communicating with the server.
            SolrServerError: If Solr returned an error or did not report success.
        """
        self._ensure_accumulating()
        if not self.name:
            raise SolrUsageError("A collection name is required")
        self._consume()

        result = await self.api._http_requests.post(COLLECTIONS_ADMIN_URL, params=self.params)

        failure = result.get("failure")
        if failure is not None:
            raise SolrServerError(_failure_message(failure), metadata=failure)
        if "success" not in result:
            raise SolrServerError(f"Solr did not report success creating collection {self.name}")

        return self.api._collection(self.name, self.hits_type)


def _failure_message(failure: Any) -> str:
    if isinstance(failure, dict):
        return "; ".join(f"{k}: {v}" for k, v in failure.items())

    return str(failure)
