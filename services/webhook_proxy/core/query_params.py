"""
Query parameter extraction.

Splits the query string into the five fixed webhook parameters and a bag of
custom parameters passed through to normalizers.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

QUERY_PARAM_OUTPUT_ADAPTERS = "adapters"
QUERY_PARAM_INPUT_TYPE = "inputType"
QUERY_PARAM_OUTPUT_TYPE = "outputType"
QUERY_PARAM_TOKEN = "token"
QUERY_PARAM_OUTPUT_URL = "url"

FIXED_PARAMS = (
    QUERY_PARAM_OUTPUT_ADAPTERS,
    QUERY_PARAM_INPUT_TYPE,
    QUERY_PARAM_OUTPUT_TYPE,
    QUERY_PARAM_TOKEN,
    QUERY_PARAM_OUTPUT_URL,
)

_FIXED_PARAMS_LOWER = frozenset(name.lower() for name in FIXED_PARAMS)


@dataclass(frozen=True)
class FixedParams:
    input_type: str = ""
    output_type: str = ""
    output_url: str = ""
    token: str = ""
    output_names: List[str] = field(default_factory=list)


def split_output_names(value: str) -> List[str]:
    """Split a comma separated adapter list, dropping blank entries."""
    return [name.strip() for name in value.split(",") if name.strip()]


def extract_query_params(
    query_params: Mapping[str, str],
) -> Tuple[FixedParams, Dict[str, List[str]]]:
    """
    Partition query parameters into fixed fields and custom parameters.

    Fixed names are matched case-sensitively. Custom parameters are keyed by
    their lower-cased, trimmed name and keep every value in arrival order;
    a key matching a fixed name in any casing is never treated as custom.

    Args:
        query_params: name -> value as supplied by the transport

    Returns:
        (FixedParams, custom name -> values)
    """

    def fixed(name: str) -> str:
        return query_params.get(name, "").strip()

    fixed_params = FixedParams(
        input_type=fixed(QUERY_PARAM_INPUT_TYPE),
        output_type=fixed(QUERY_PARAM_OUTPUT_TYPE),
        output_url=fixed(QUERY_PARAM_OUTPUT_URL),
        token=fixed(QUERY_PARAM_TOKEN),
        output_names=split_output_names(query_params.get(QUERY_PARAM_OUTPUT_ADAPTERS, "")),
    )

    custom: Dict[str, List[str]] = {}
    for key, value in query_params.items():
        name = key.strip().lower()
        if name in _FIXED_PARAMS_LOWER:
            continue
        custom.setdefault(name, []).append(value)

    return fixed_params, custom
