from __future__ import annotations

import logging
from typing import Generic, TypeVar

from app.projekt.db import EntitySet, PersistenceContext
from app.projekt.models import Base

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)


class Repository(Generic[T]):
    """
    CRUD over a single entity kind.

    Every write is its own save cycle: add/update/delete persist before
    returning, nothing is batched across calls.
    """

    def __init__(self, context: PersistenceContext, model: type[T]) -> None:
        self._context = context
        self._set: EntitySet[T] = context.set(model)
        self.model = model

    def get_all(self) -> list[T]:
        return self._set.all()

    def get_by_id(self, entity_id: int) -> T | None:
        return self._set.find(entity_id)

    def add(self, entity: T) -> None:
        self._set.add(entity)
        self._context.save()

    def update(self, entity: T) -> None:
        self._set.update(entity)
        self._context.save()

    def delete(self, entity_id: int) -> bool:
        """Remove the row if present. Missing ids are a no-op and return False."""
        entity = self.get_by_id(entity_id)
        if entity is None:
            logger.debug("%s id=%s not found; nothing to delete", self.model.__name__, entity_id)
            return False
        self._set.remove(entity)
        self._context.save()
        return True
