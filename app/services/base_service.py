"""Base service class with common database operations."""

import re
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base
from app.schemas.paging import PagedResponse

ModelType = TypeVar("ModelType", bound=Base)

_SEPARATORS = re.compile(r"[\s,]+")


def _split_terms(value: str | None) -> list[str]:
    """Split a space or comma separated field list."""
    if not value:
        return []
    return [term for term in _SEPARATORS.split(value.strip()) if term]


class BaseService(Generic[ModelType]):
    """Base service with the document-store operations used by the API.

    Documents are plain dicts shaped by ``dto``: the DTO decides which model
    attributes are public and under which (aliased) names they are exposed.
    """

    dto: type[BaseModel]

    def __init__(self, db: AsyncSession, model: type[ModelType]):
        self.db = db
        self.model = model

    # Field projection

    def _public_names(self) -> dict[str, str]:
        """Map public (aliased or plain) field names to DTO field names."""
        names: dict[str, str] = {}
        for name, info in self.dto.model_fields.items():
            names[name] = name
            if info.alias:
                names[info.alias] = name
        return names

    def fields_adapter(self, fields: str | None) -> set[str] | None:
        """Turn a field list such as ``"username email"`` into a projection.

        A leading ``-`` excludes a field. ``id`` is kept unless excluded.
        Returns None when every field should be returned.
        """
        terms = _split_terms(fields)
        if not terms:
            return None

        names = self._public_names()
        included: set[str] = set()
        excluded: set[str] = set()
        for term in terms:
            target = excluded if term.startswith("-") else included
            name = names.get(term.lstrip("-"))
            if name:
                target.add(name)

        if included:
            if "id" not in excluded:
                included.add("id")
            return included - excluded
        return set(self.dto.model_fields) - excluded

    def to_document(
        self, obj: ModelType, fields: set[str] | None = None
    ) -> dict[str, Any]:
        """Convert a model instance to a response document."""
        return self.dto.model_validate(obj).model_dump(
            mode="json",
            by_alias=True,
            include=fields,
        )

    def _sort_clauses(self, sort: str | None) -> list[Any]:
        """Build ORDER BY clauses from ``"username -email"`` style input."""
        names = self._public_names()
        clauses = []
        for term in _split_terms(sort):
            name = names.get(term.lstrip("-"))
            column = getattr(self.model, name, None) if name else None
            if column is None:
                continue
            clauses.append(column.desc() if term.startswith("-") else column.asc())
        return clauses or [self.model.id.asc()]

    # Store operations

    async def get_by_id(self, id: Any) -> ModelType | None:
        """Get entity by primary key."""
        return await self.db.get(self.model, id)

    async def find_by_id(
        self, id: Any, fields: set[str] | None = None
    ) -> dict[str, Any] | None:
        """Get a document by primary key, or None when absent."""
        obj = await self.get_by_id(id)
        if obj is None:
            return None
        return self.to_document(obj, fields)

    async def find_one(self, *conditions: Any) -> ModelType | None:
        """Get the first entity matching all conditions."""
        result = await self.db.execute(
            select(self.model).where(*conditions).limit(1)
        )
        return result.scalars().first()

    async def paged_find(
        self,
        conditions: list[Any],
        fields: str | None,
        sort: str | None,
        limit: int,
        page: int,
    ) -> PagedResponse:
        """Get one page of matching documents plus count metadata."""
        query = select(self.model).where(*conditions)

        count_query = select(func.count()).select_from(query.subquery())
        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        query = query.order_by(*self._sort_clauses(sort))
        query = query.offset((page - 1) * limit).limit(limit)

        result = await self.db.execute(query)
        projection = self.fields_adapter(fields)
        data = [self.to_document(obj, projection) for obj in result.scalars().all()]

        return PagedResponse.build(data, total=total, limit=limit, page=page)

    async def create(self, obj: ModelType) -> ModelType:
        """Create new entity."""
        self.db.add(obj)
        await self._commit()
        await self.db.refresh(obj)
        return obj

    async def find_by_id_and_update(
        self,
        id: Any,
        values: dict[str, Any],
        fields: set[str] | None = None,
    ) -> dict[str, Any] | None:
        """Set attributes on an entity and return the updated document."""
        obj = await self.get_by_id(id)
        if obj is None:
            return None

        for key, value in values.items():
            setattr(obj, key, value)
        await self._commit()
        await self.db.refresh(obj)
        return self.to_document(obj, fields)

    async def find_by_id_and_remove(self, id: Any) -> int:
        """Delete an entity by primary key and return the removed count."""
        result = await self.db.execute(
            delete(self.model).where(self.model.id == id)
        )
        await self._commit()
        return result.rowcount or 0

    async def _commit(self) -> None:
        await self.db.commit()
