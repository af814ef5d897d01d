"""Resource Helpers — lookup, re-validation and envelope shaping shared by handlers.

Invariants:
    - Every success body is {"success": true, "data": ...} (+ count / pagination for lists)
    - load_or_404 raises ResourceNotFoundError, never returns None
    - revalidate checks the MERGED record, so an update can never persist a
      state that create would have rejected
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ValidationError

from tasker_api.core.advanced_query import QuerySpec, build_pagination, project
from tasker_api.core.errors import ResourceNotFoundError, ValidationFailedError
from tasker_api.core.repository_protocols import Repository


def envelope(data: Any, **extra: Any) -> dict:
    return {"success": True, **extra, "data": data}


def serialize(response_model: type[BaseModel], record: dict) -> dict:
    return response_model.model_validate(record).model_dump(mode="json")


async def load_or_404(repo: Repository, record_id: UUID, resource_type: str) -> dict:
    record = await repo.get(record_id)
    if record is None:
        raise ResourceNotFoundError(resource_type, str(record_id))
    return record


def validation_message(exc: ValidationError) -> str:
    return ", ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
        for err in exc.errors()
    )


def revalidate(schema: type[BaseModel], current: dict, changes: dict) -> dict:
    """Validate current+changes against schema; return the validated changes."""
    merged = {
        name: changes.get(name, current.get(name))
        for name in schema.model_fields
    }
    try:
        validated = schema.model_validate(merged)
    except ValidationError as e:
        raise ValidationFailedError(
            validation_message(e),
            [".".join(str(p) for p in err["loc"]) for err in e.errors()],
        ) from e
    return {name: getattr(validated, name) for name in changes if name in schema.model_fields}


async def list_with_query(
    repo: Repository, spec: QuerySpec, response_model: type[BaseModel],
) -> dict:
    """AdvancedQuery envelope: count, pagination and the (projected) page."""
    records, total = await repo.query(spec)
    data = [project(serialize(response_model, r), spec.select) for r in records]
    return envelope(
        data, count=len(data),
        pagination=build_pagination(total, spec.page, spec.limit),
    )
