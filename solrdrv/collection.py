from __future__ import annotations

from typing import Any

from httpx import AsyncClient as HttpxAsyncClient
from pydantic import ValidationError

from solrdrv._http_requests import AsyncHttpRequests
from solrdrv.documents import DocumentsBuilder
from solrdrv.errors import SolrDecodeError, SolrUsageError
from solrdrv.json_handler import BuiltinHandler, JsonHandler
from solrdrv.models.field import FieldDescriptor
from solrdrv.schema import SchemaBuilder
from solrdrv.search import SearchBuilder
from solrdrv.types import DocumentPayload, JsonDict


class Collection:
    """Handle to a single Solr collection.

    The handle itself never changes, it only hands out new single use builders for the schema,
    documents and search routes of the collection.

    https://solr.apache.org/guide/solr/latest/deployment-guide/collection-management.html
    """

    def __init__(
        self,
        http_client: HttpxAsyncClient,
        name: str,
        *,
        json_handler: JsonHandler | None = None,
        hits_type: Any = JsonDict,
    ) -> None:
        """Class initializer.

        Args:
            http_client: An instance of the httpx AsyncClient. This automatically gets passed by
                the AsyncClient when creating a Collection instance.
            name: The name of the collection.
            json_handler: The module to use for json operations. Default: BuiltinHandler.
            hits_type: Allows for a custom type to be passed to use for search result documents.
                Defaults to JsonDict
        """
        self.http_client = http_client
        self.name = name
        self.hits_type = hits_type
        self._json_handler = json_handler if json_handler else BuiltinHandler()
        self._http_requests = AsyncHttpRequests(http_client, json_handler=self._json_handler)
        self._schema_url = f"{self.name}/schema"
        self._update_url = f"{self.name}/update"
        self._select_url = f"{self.name}/select"

    def __str__(self) -> str:
        return f"{type(self).__name__}(name={self.name})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    def schema(self) -> SchemaBuilder:
        """Starts a batch of schema changes.

        Examples:
            >>> from solrdrv import AsyncClient, FieldBuilder
            >>> async with AsyncClient("http", "localhost", 8983) as client:
            >>>     users = client.collection("users")
            >>>     await users.schema().add_field(FieldBuilder.string("name")).commit()
        """
        return SchemaBuilder(self)

    def documents(
        self, *, commit: bool = True, commit_within: int | None = None
    ) -> DocumentsBuilder:
        """Starts a batch of document updates.

        Args:
            commit: Whether Solr should hard commit the index once the update is applied.
                Defaults to True.
            commit_within: Ask Solr to commit within this many milliseconds. Defaults to None.
        """
        return DocumentsBuilder(self, commit=commit, commit_within=commit_within)

    def add(self, documents: DocumentPayload) -> DocumentsBuilder:
        """Shortcut for `documents().add(documents)`.

        Examples:
            >>> await users.add([{"name": "Some", "age": 19}]).add({"name": "Dude"}).commit()
        """
        return self.documents().add(documents)

    def search(self) -> SearchBuilder:
        """Starts a query against the select handler.

        Examples:
            >>> results = await users.search().query("age:21").fl("name,age").commit()
            >>> results.num_found
        """
        return SearchBuilder(self)

    async def get_schema(self) -> JsonDict:
        """Fetches the whole schema of the collection.

        Raises:
            SolrTransportError: If there was an error communicating with the server.
            SolrServerError: If Solr returned an error.
        """
        result = await self._http_requests.get(self._schema_url)
        schema = result.get("schema")
        if not isinstance(schema, dict):
            raise SolrDecodeError(f"No schema in response for collection {self.name}")

        return schema

    async def get_fields(self) -> list[FieldDescriptor]:
        """Fetches the explicitly defined fields of the collection."""
        result = await self._http_requests.get(f"{self._schema_url}/fields")
        fields = result.get("fields")
        if not isinstance(fields, list):
            raise SolrDecodeError(f"No fields in response for collection {self.name}")

        try:
            return [FieldDescriptor.model_validate(x) for x in fields]
        except (ValidationError, SolrUsageError) as err:
            raise SolrDecodeError(f"Unexpected field in schema of {self.name}: {err}") from err

    async def delete(self) -> None:
        """Deletes the collection from the cluster."""
        await self._http_requests.get(
            "admin/collections", params={"action": "DELETE", "name": self.name, "wt": "json"}
        )
