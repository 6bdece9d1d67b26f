from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from loguru import logger

from solrdrv._builder import BaseBuilder
from solrdrv.errors import SchemaUpdateError, SolrServerError
from solrdrv.models.field import FieldDescriptor, SchemaAction, SchemaOperation

if TYPE_CHECKING:  # pragma: no cover
    import sys

    from solrdrv.collection import Collection

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self


class SchemaBuilder(BaseBuilder):
    """Collects schema operations and sends them to the Schema API as one batch.

    Operations are sent in the order they were added. Solr applies them in that order, and
    decides on its own whether a failing batch is rolled back.

    https://solr.apache.org/guide/solr/latest/indexing-guide/schema-api.html
    """

    def __init__(self, collection: Collection) -> None:
        super().__init__()
        self.collection = collection
        self._operations: list[SchemaOperation] = []

    @property
    def operations(self) -> tuple[SchemaOperation, ...]:
        return tuple(self._operations)

    def _append(self, action: SchemaAction, payload: dict[str, Any]) -> Self:
        self._ensure_accumulating()
        self._operations.append(SchemaOperation(action=action, payload=payload))
        return self

    def add_field(self, field: FieldDescriptor | Mapping[str, Any]) -> Self:
        return self._append("add-field", _field_payload(field))

    def replace_field(self, field: FieldDescriptor | Mapping[str, Any]) -> Self:
        return self._append("replace-field", _field_payload(field))

    def delete_field(self, name: str) -> Self:
        return self._append("delete-field", {"name": name})

    def add_copy_field(
        self, source: str, dest: str | list[str], max_chars: int | None = None
    ) -> Self:
        payload: dict[str, Any] = {"source": source, "dest": dest}
        if max_chars is not None:
            payload["maxChars"] = max_chars

        return self._append("add-copy-field", payload)

    def delete_copy_field(self, source: str, dest: str) -> Self:
        return self._append("delete-copy-field", {"source": source, "dest": dest})

    async def commit(self) -> tuple[SchemaOperation, ...]:
        """Sends the pending operations.

        Returns:
            The operations that were applied, in order.

        Raises:
            SolrUsageError: If the builder was already committed.
            SolrTransportError: If there was an error communicating with the server.
            SchemaUpdateError: If Solr rejected the batch. `failed_operations` lists the indexes
                of the operations Solr reported on, when it reported any.
        """
        self._consume()
        operations = self.operations
        if not operations:
            logger.info("No schema changes to commit for {}, skipping", self.collection.name)
            return operations

        try:
            await self.collection._http_requests.post(
                self.collection._schema_url, body=[x.to_command() for x in operations]
            )
        except SolrServerError as err:
            raise SchemaUpdateError(
                err.message,
                code=err.code,
                status_code=err.status_code,
                metadata=err.metadata,
                details=err.details,
                failed_operations=match_failed_operations(operations, err.details),
            ) from err

        return operations


def _field_payload(field: FieldDescriptor | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(field, FieldDescriptor):
        return field.to_payload()

    return dict(field)


def match_failed_operations(
    operations: tuple[SchemaOperation, ...], details: Any
) -> list[tuple[int | None, str, list[str]]]:
    """Pairs each entry of Solr's `error.details` with the index of the operation it echoes.

    Solr repeats the failing command next to its `errorMessages`. When a command cannot be found
    in the batch the index is None.
    """
    if not isinstance(details, list):
        return []

    failed: list[tuple[int | None, str, list[str]]] = []
    matched: set[int] = set()
    for detail in details:
        if not isinstance(detail, dict):
            continue

        messages = detail.get("errorMessages") or []
        if isinstance(messages, str):
            messages = [messages]
        command = {k: v for k, v in detail.items() if k != "errorMessages"}
        action = next(iter(command), "")

        index = None
        for i, operation in enumerate(operations):
            if i not in matched and operation.to_command() == command:
                index = i
                matched.add(i)
                break

        failed.append((index, action, [str(x).strip() for x in messages]))

    return failed
