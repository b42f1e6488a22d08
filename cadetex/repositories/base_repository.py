"""Generic row-level data access shared by every entity repository.

Repositories never commit and never validate; the calling lifecycle
service owns the transaction.
"""

from typing import Any, Generic, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from cadetex.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Find/insert/update/delete for one mapped class."""

    model: Type[ModelT]

    def get(self, db: Session, entity_id: UUID) -> ModelT | None:
        """Get a row by primary key.

        Args:
            db: Active session
            entity_id: Primary key

        Returns:
            Model instance or None if not found
        """
        return db.get(self.model, entity_id)

    def list_all(self, db: Session) -> Sequence[ModelT]:
        return db.scalars(select(self.model)).all()

    def add(self, db: Session, entity: ModelT) -> ModelT:
        """Insert a row and flush so generated ids and constraints apply."""
        db.add(entity)
        db.flush()
        return entity

    def update_fields(self, db: Session, entity_id: UUID, values: dict[str, Any]) -> int:
        """Apply a sparse column update.

        Args:
            db: Active session
            entity_id: Primary key of the row to change
            values: Column name to new value

        Returns:
            Number of rows affected (0 when the row vanished)
        """
        if not values:
            return 1 if self.get(db, entity_id) is not None else 0
        stmt = (
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**values)
            .execution_options(synchronize_session="evaluate")
        )
        return db.execute(stmt).rowcount

    def delete(self, db: Session, entity_id: UUID) -> bool:
        """Delete a row by primary key.

        Returns:
            True if a row was deleted, False if not found
        """
        entity = self.get(db, entity_id)
        if entity is None:
            return False
        db.delete(entity)
        db.flush()
        return True


class OrganizationScopedRepository(BaseRepository[ModelT]):
    """Repository for models carrying an organization_id column."""
