"""Envelope Builder — wraps callback results into the uniform `{data: {node: payload}}` shape.

Invariants:
    - Sequence → list under node_name; Scalar → value under node_name
    - Mismatch (result contradicts declared shape) → ResourceNotFoundError
    - Empty is never enveloped — callers decide 204/400 before reaching here
    - Header attachment is NOT done here (see core.response_headers)
"""

from restful_service.core.domain_types import NodeName
from restful_service.core.errors import ResourceNotFoundError
from restful_service.core.results import OperationResult, Scalar, Sequence


def build_envelope(node_name: NodeName, result: OperationResult) -> dict:
    """Place the payload under data[node_name]."""
    match result:
        case Sequence(items=items):
            return {"data": {node_name: list(items)}}
        case Scalar(value=value):
            return {"data": {node_name: value}}
        case _:
            raise ResourceNotFoundError(node_name)


def build_paged_envelope(
    node_name: NodeName, items: list, meta: dict, links: list[dict],
) -> dict:
    """Sequence envelope plus paging meta and navigation links."""
    envelope = build_envelope(node_name, Sequence(tuple(items)))
    envelope["meta"] = meta
    envelope["links"] = links
    return envelope
