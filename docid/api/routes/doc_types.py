"""Document type catalogue routes.

GET /doc-types lists every classifiable type in priority order.
GET /doc-types/{name} returns one type; names are case-insensitive and
unknown names yield 404.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from docid.doctypes.registry import (
    REGISTRY,
    DocTypeDefinition,
    TypeHasNoPattern,
    UnknownTypeName,
)

router = APIRouter(prefix="/doc-types", tags=["doc-types"])


class DocTypeOut(BaseModel):
    code: int
    name: str
    description: str
    pattern: str
    normalizer: str
    has_secondary_validator: bool
    priority: int


def _to_out(definition: DocTypeDefinition, priority: int) -> DocTypeOut:
    return DocTypeOut(
        code=definition.code,
        name=definition.name,
        description=definition.description,
        pattern=definition.pattern,
        normalizer=definition.normalizer,
        has_secondary_validator=definition.validator is not None,
        priority=priority,
    )


@router.get("", summary="List classifiable document types", response_model=list[DocTypeOut])
def list_doc_types() -> list[DocTypeOut]:
    return [_to_out(d, priority) for priority, d in enumerate(REGISTRY)]


@router.get("/{name}", summary="Describe one document type", response_model=DocTypeOut)
def get_doc_type(name: str) -> DocTypeOut:
    try:
        doc_type = REGISTRY.parse(name)
        definition = REGISTRY.definition_for(doc_type)
    except (UnknownTypeName, TypeHasNoPattern) as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    priority = REGISTRY.classifiable_types().index(doc_type)
    return _to_out(definition, priority)
