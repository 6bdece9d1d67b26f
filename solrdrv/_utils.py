from __future__ import annotations

from collections.abc import Iterable, Mapping
from urllib.parse import urlencode

from solrdrv.types import ParamValue


def encode_param_value(value: ParamValue) -> str:
    # Solr expects lowercase booleans
    if isinstance(value, bool):
        return "true" if value else "false"

    return str(value)


def encode_params(
    params: Mapping[str, ParamValue | list[ParamValue]] | Iterable[tuple[str, ParamValue]],
) -> str:
    """Form-encodes query parameters, repeating keys that hold a list.

    Only the transport level is escaped (`age:21` becomes `age%3A21`), Solr decodes it back
    before the query parser sees it.
    """
    items = params.items() if isinstance(params, Mapping) else params
    pairs: list[tuple[str, str]] = []
    for key, value in items:
        if isinstance(value, list):
            pairs.extend((key, encode_param_value(x)) for x in value)
        else:
            pairs.append((key, encode_param_value(value)))

    return urlencode(pairs)


def build_encoded_url(
    base_url: str,
    params: Mapping[str, ParamValue | list[ParamValue]] | Iterable[tuple[str, ParamValue]],
) -> str:
    encoded = encode_params(params)
    if not encoded:
        return base_url

    return f"{base_url}?{encoded}"
