from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

from pydantic import BaseModel

JsonDict: TypeAlias = dict[str, Any]
Document: TypeAlias = Mapping[str, Any] | BaseModel
DocumentPayload: TypeAlias = Document | Sequence[Document]
ParamValue: TypeAlias = str | int | float | bool
