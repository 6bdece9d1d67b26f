from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import BaseModel

from solrdrv._builder import BaseBuilder
from solrdrv.errors import InvalidDocumentError
from solrdrv.types import DocumentPayload, JsonDict, ParamValue

if TYPE_CHECKING:  # pragma: no cover
    import sys

    from solrdrv.collection import Collection
    from solrdrv.json_handler import JsonHandler

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self


class DocumentsBuilder(BaseBuilder):
    """Collects documents to index, and optionally deletions, for one update request.

    Repeated calls to `add` accumulate: `add(a).add([b, c])` sends `[a, b, c]`.

    https://solr.apache.org/guide/solr/latest/indexing-guide/indexing-with-update-handlers.html
    """

    def __init__(
        self, collection: Collection, *, commit: bool = True, commit_within: int | None = None
    ) -> None:
        super().__init__()
        self.collection = collection
        self.commit_on_update = commit
        self.commit_within = commit_within
        self._commands: list[tuple[str, Any]] = []

    @property
    def commit_size(self) -> int:
        """Number of documents waiting to be sent."""
        return sum(1 for x in self._commands if x[0] == "add")

    def add(self, documents: DocumentPayload) -> Self:
        """Queues one document or a sequence of documents.

        Args:
            documents: A mapping, a pydantic model, or a sequence of either.

        Raises:
            InvalidDocumentError: If the payload, or any element of it, is not an object. Nothing
                is queued in that case.
        """
        self._ensure_accumulating()
        if isinstance(documents, (Mapping, BaseModel)):
            batch = [documents]
        elif isinstance(documents, Sequence) and not isinstance(documents, (str, bytes)):
            batch = list(documents)
        else:
            raise InvalidDocumentError(
                f"Documents must be an object or a list of objects, got {type(documents).__name__}"
            )

        converted = [_to_document(x) for x in batch]
        self._commands.extend(("add", x) for x in converted)

        return self

    def delete(self, ids: str | Sequence[str]) -> Self:
        """Queues deletion of documents by their unique key."""
        self._ensure_accumulating()
        if isinstance(ids, str):
            ids = [ids]
        self._commands.extend(("delete", {"id": x}) for x in ids)

        return self

    def delete_by_query(self, query: str) -> Self:
        """Queues deletion of every document matching the query."""
        self._ensure_accumulating()
        self._commands.append(("delete", {"query": query}))

        return self

    def _build_params(self) -> dict[str, ParamValue]:
        params: dict[str, ParamValue] = {}
        if self.commit_on_update:
            params["commit"] = True
        if self.commit_within is not None:
            params["commitWithin"] = self.commit_within

        return params

    async def commit(self) -> JsonDict:
        """Sends the queued documents in a single update request.

        Returns:
            The response body without its header. Solr's own per-document error reporting, when
            enabled on the server, is returned untouched.

        Raises:
            SolrUsageError: If the builder was already committed.
            SolrTransportError: If there was an error communicating with the server.
            SolrServerError: If Solr returned an error.
        """
        self._consume()
        if not self._commands:
            logger.info("No documents to commit for {}, skipping", self.collection.name)
            return {}

        if all(x[0] == "add" for x in self._commands):
            body: Any = [x[1] for x in self._commands]
        else:
            body = encode_update_commands(self._commands, self.collection._json_handler)

        return await self.collection._http_requests.post(
            self.collection._update_url, body=body, params=self._build_params()
        )


def _to_document(document: Any) -> JsonDict:
    if isinstance(document, BaseModel):
        return document.model_dump(by_alias=True)

    if isinstance(document, Mapping):
        return dict(document)

    raise InvalidDocumentError(
        f"Each document must be an object, got {type(document).__name__}"
    )


def encode_update_commands(commands: list[tuple[str, Any]], json_handler: JsonHandler) -> str:
    """Encodes commands as a Solr JSON update object.

    Solr reads the object in order and allows the same key more than once, which a dict cannot
    hold, so the object is assembled from encoded pieces.
    """
    parts = []
    for name, value in commands:
        if name == "add":
            value = {"doc": value}
        parts.append(f"{json_handler.dumps(name)}:{json_handler.dumps(value)}")

    return "{" + ",".join(parts) + "}"
