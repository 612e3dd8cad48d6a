"""Generic persistence helpers shared by the entity services.

``CRUDService`` wraps one SQLAlchemy model: lookup by id, paginated listing,
create/update/delete with unique-constraint mapping and atomic counters.
Entity services subclass it and add their derived fields and invariants.
"""
import logging
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel, ValidationError
from sqlalchemy import String, cast
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from app.core.database import Base, json_serializer
from app.core.exceptions import Conflict, MalformedIdentifier, NotFound, ValidationFailed
from app.schemas.common import Pagination, format_validation_errors

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
SchemaType = TypeVar("SchemaType", bound=BaseModel)


def parse_uuid(value: Any, label: str = "resource") -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise MalformedIdentifier(f"Invalid {label} ID")


def validate_payload(schema: Type[SchemaType], data: Dict[str, Any]) -> SchemaType:
    """Validate raw (e.g. multipart form) fields against a schema."""
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed(errors=format_validation_errors(e.errors()))


LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Make ``%`` and ``_`` in user input match literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(value: str) -> str:
    """``%value%`` for an ``ilike(..., escape=LIKE_ESCAPE)`` substring search."""
    return f"%{escape_like(value)}%"


def json_list_contains(column, value: str):
    """
    Match a JSON list column holding ``value`` as one of its items.

    The item is looked up in its serialized form (quoted, same encoding as
    ``json_serializer``), so ``faith`` does not match ``faithful``.
    """
    item = json_serializer(value)
    return cast(column, String).like(contains_pattern(item), escape=LIKE_ESCAPE)


class CRUDService(Generic[ModelType]):
    model: Type[ModelType]
    label: str = "resource"
    conflict_message: str = "Duplicate entry"
    sortable: Tuple[str, ...] = ("created_at",)

    def __init__(self, session: Session):
        self.session = session

    # Lookups
    def query(self, *criteria) -> Query:
        return self.session.query(self.model).filter(*criteria)

    def get(self, id: Any, *criteria) -> Optional[ModelType]:
        pk = parse_uuid(id, self.label)
        return self.query(self.model.id == pk, *criteria).first()

    def get_or_404(self, id: Any, *criteria) -> ModelType:
        obj = self.get(id, *criteria)
        if obj is None:
            raise NotFound(f"{self.label.capitalize()} not found")
        return obj

    def order_by(self, sort: Optional[str], default: Sequence[Any]) -> List[Any]:
        """Translate ``field`` / ``-field`` into an ORDER BY clause."""
        if not sort:
            return list(default)
        descending = sort.startswith("-")
        field = sort.lstrip("-")
        if field not in self.sortable:
            raise ValidationFailed(
                errors=[{"field": "sort", "message": f"Sorting by '{field}' is not supported"}]
            )
        column = getattr(self.model, field)
        return [column.desc() if descending else column.asc()]

    def paginate(self, query: Query, page: int, limit: int, order_by: Iterable[Any] = ()) -> Tuple[List[ModelType], Pagination]:
        total = query.order_by(None).count()
        items = (
            query.order_by(*order_by)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return items, Pagination.build(page, limit, total)

    # Mutations
    def save(self, obj: ModelType) -> ModelType:
        self.session.add(obj)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.error(f"Database integrity error on {self.label}: {str(e)}")
            raise Conflict(self.conflict_message)
        self.session.refresh(obj)
        return obj

    def create(self, data: Dict[str, Any]) -> ModelType:
        return self.save(self.model(**data))

    def update(self, obj: ModelType, data: Dict[str, Any]) -> ModelType:
        for field, value in data.items():
            setattr(obj, field, value)
        return self.save(obj)

    def delete(self, obj: ModelType) -> None:
        self.session.delete(obj)
        self.session.commit()

    def increment(self, id: Any, column: str, *criteria) -> ModelType:
        """Atomically add one to a counter; no row matched means not found."""
        pk = parse_uuid(id, self.label)
        counter = getattr(self.model, column)
        updated = (
            self.session.query(self.model)
            .filter(self.model.id == pk, *criteria)
            .update({counter: counter + 1}, synchronize_session=False)
        )
        if not updated:
            self.session.rollback()
            raise NotFound(f"{self.label.capitalize()} not found")
        self.session.commit()
        obj = self.get(pk)
        self.session.refresh(obj)
        return obj
