"""
Base repository class providing common database operations.

Writes are committed immediately; any SQLAlchemy error rolls the session back
and surfaces as StorageException. Nothing is retried.
"""

from typing import Any, Generic, TypeVar

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from models.exceptions import StorageException
from repositories.database import Base

T = TypeVar("T", bound=Base)  # type: ignore[type-arg]


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Type parameter T should be a SQLAlchemy model class.
    """

    def __init__(self, model: type[T], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def get_by_id(self, id: int) -> T | None:
        """
        Get entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity if found, None otherwise
        """
        return self.db.query(self.model).filter(self.model.id == id).first()

    def create(self, entity: T) -> T:
        """
        Persist a new entity.

        Args:
            entity: Entity to create

        Returns:
            Created entity with its generated ID

        Raises:
            StorageException: If the write fails
        """
        self.db.add(entity)
        self.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: T) -> T:
        """
        Commit pending changes on an already-loaded entity.

        Raises:
            StorageException: If the write fails
        """
        self.commit()
        self.db.refresh(entity)
        return entity

    def count(self) -> int:
        """Count total number of entities."""
        return self.db.query(self.model).count()

    def paginate(self, query: Query, page: int, limit: int) -> tuple[list[T], int]:
        """
        Slice a query by 1-based page number.

        Args:
            query: Filtered and ordered query
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (items on the page, total matching rows)
        """
        total = query.order_by(None).count()
        items = query.offset((page - 1) * limit).limit(limit).all()
        return items, total

    def commit(self) -> None:
        """
        Commit the current transaction.

        IntegrityError is re-raised unchanged so callers can map it to a
        domain conflict; every other database error becomes StorageException.
        """
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{self.model.__name__} write failed: {e!r}")
            raise StorageException(
                f"Failed to save {self.model.__name__.lower()}"
            ) from e

    def rollback(self) -> None:
        """Rollback the current transaction."""
        self.db.rollback()

    def apply_changes(self, entity: T, changes: dict[str, Any]) -> T:
        """Set attributes from a partial-update mapping and commit."""
        for field, value in changes.items():
            setattr(entity, field, value)
        return self.update(entity)
