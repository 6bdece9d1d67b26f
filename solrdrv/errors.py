from __future__ import annotations

from typing import Any


class SolrError(Exception):
    """Generic class for Solr error handling."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"SolrError. Error message: {self.message}."


class SolrTransportError(SolrError):
    """Error when the request never got an answer from Solr."""

    def __str__(self) -> str:
        return f"SolrTransportError, {self.message}"


class SolrDecodeError(SolrError):
    """Error for response bodies that are not JSON or are missing expected keys."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        return f"SolrDecodeError, {self.message}"


class SolrServerError(SolrError):
    """Error reported by Solr in the response envelope."""

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        status_code: int | None = None,
        metadata: Any = None,
        details: Any = None,
    ) -> None:
        self.code = code
        self.status_code = status_code
        self.metadata = metadata
        self.details = details
        super().__init__(message)

    @classmethod
    def from_error(cls, error: Any, status_code: int | None = None) -> SolrServerError:
        if not isinstance(error, dict):
            return cls(str(error), code=status_code, status_code=status_code)

        return cls(
            error.get("msg") or "",
            code=error.get("code"),
            status_code=status_code,
            metadata=error.get("metadata"),
            details=error.get("details"),
        )

    def __str__(self) -> str:
        return f"SolrServerError.{self.code} Error message: {self.message}"


class SchemaUpdateError(SolrServerError):
    """Error when Solr rejects a batch of schema operations.

    `failed_operations` holds one entry per operation Solr complained about, as
    `(index, action, messages)`. It is empty when Solr only reported an aggregate failure.
    """

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        status_code: int | None = None,
        metadata: Any = None,
        details: Any = None,
        failed_operations: list[tuple[int | None, str, list[str]]] | None = None,
    ) -> None:
        self.failed_operations = failed_operations or []
        super().__init__(
            message, code=code, status_code=status_code, metadata=metadata, details=details
        )

    def __str__(self) -> str:
        indexes = [str(x[0]) for x in self.failed_operations if x[0] is not None]
        if not indexes:
            return f"SchemaUpdateError.{self.code} Error message: {self.message}"

        return (
            f"SchemaUpdateError.{self.code} Error message: {self.message} "
            f"(operations {', '.join(indexes)})"
        )


class SolrUsageError(SolrError):
    """Error for misuse that can be detected without talking to Solr."""

    def __str__(self) -> str:
        return f"SolrUsageError, {self.message}"


class InvalidDocumentError(SolrUsageError):
    """Error for documents that are not in a valid format for Solr."""

    def __str__(self) -> str:
        return f"InvalidDocumentError, {self.message}"


class CollectionNotFoundError(SolrError):
    def __str__(self) -> str:
        return f"CollectionNotFoundError, {self.message}"
