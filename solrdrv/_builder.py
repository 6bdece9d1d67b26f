from __future__ import annotations

from solrdrv.errors import SolrUsageError


class BaseBuilder:
    """State shared by every request builder.

    A builder accumulates parameters until `commit` is awaited, after which it is consumed and
    every further call raises SolrUsageError.
    """

    def __init__(self) -> None:
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _ensure_accumulating(self) -> None:
        if self._consumed:
            raise SolrUsageError(
                f"{type(self).__name__} has already been committed, create a new builder"
            )

    def _consume(self) -> None:
        self._ensure_accumulating()
        self._consumed = True
