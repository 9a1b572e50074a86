# app/services/store.py - Generic record store over a SQLAlchemy model
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar
from uuid import UUID
import logging

from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StorageError, ValidationError
from app.models.course import Course
from app.models.student import Student

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class Store(Generic[ModelT]):
    """
    Storage interface used by the routers, the referential guard and the
    stats aggregator.

    Every query failure is rolled back and re-raised as ``StorageError``;
    unique-constraint violations surface as ``ValidationError``.
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model
        self.label = model.__name__

    @contextmanager
    def _storage_errors(self, action: str):
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"{self.label} {action} rejected by a constraint: {e.orig}")
            raise ValidationError(f"{self.label} violates a unique constraint") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage failure during {self.label} {action}: {e}")
            raise StorageError(f"{self.label} {action} failed") from e

    def _where(self, query, filters: Dict[str, Any]):
        for field, value in filters.items():
            query = query.where(getattr(self.model, field) == value)
        return query

    def count(self, **filters) -> int:
        """Count records matching the equality filters"""
        with self._storage_errors("count"):
            query = self._where(select(func.count()).select_from(self.model), filters)
            return self.db.execute(query).scalar() or 0

    def exists(self, **filters) -> bool:
        return self.count(**filters) > 0

    def find_all(self, *order_by, **filters) -> List[ModelT]:
        with self._storage_errors("find"):
            query = self._where(select(self.model), filters)
            if order_by:
                query = query.order_by(*order_by)
            return list(self.db.execute(query).scalars().all())

    def find_by_id(self, record_id: UUID) -> Optional[ModelT]:
        with self._storage_errors("lookup"):
            return self.db.get(self.model, record_id)

    def insert(self, data: Dict[str, Any]) -> ModelT:
        record = self.model(**data)
        with self._storage_errors("insert"):
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        return record

    def update_by_id(self, record_id: UUID, data: Dict[str, Any]) -> Optional[ModelT]:
        """Overwrite the provided fields; returns None when the record does not exist"""
        with self._storage_errors("update"):
            record = self.db.get(self.model, record_id)
            if record is None:
                return None
            for field, value in data.items():
                setattr(record, field, value)
            self.db.commit()
            self.db.refresh(record)
        return record

    def delete_by_id(self, record_id: UUID) -> Optional[ModelT]:
        """Delete and return the record; returns None when it does not exist"""
        with self._storage_errors("delete"):
            record = self.db.get(self.model, record_id)
            if record is None:
                return None
            self.db.delete(record)
            self.db.commit()
        return record

    def group_and_count(self, field: str) -> Dict[Any, int]:
        """
        Map each distinct value of ``field`` to the number of records holding it.

        Records without such a field all share the ``None`` key; an empty
        table yields no groups.
        """
        column = getattr(self.model, field, None)
        if column is None:
            total = self.count()
            return {None: total} if total else {}
        with self._storage_errors("aggregate"):
            rows = self.db.execute(
                select(column, func.count()).group_by(column).order_by(column)
            ).all()
        return {key: count for key, count in rows}

    def search(self, term: str, fields: Iterable[str]) -> List[ModelT]:
        """Case-insensitive substring match over the given text fields; wildcards in ``term`` match literally"""
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        with self._storage_errors("search"):
            query = select(self.model).where(
                or_(*(getattr(self.model, field).ilike(pattern, escape="\\") for field in fields))
            )
            return list(self.db.execute(query).scalars().all())


class StudentStore(Store[Student]):
    def __init__(self, db: Session):
        super().__init__(db, Student)

    def newest_first(self) -> List[Student]:
        return self.find_all(Student.created_at.desc())

    def search_students(self, term: str) -> List[Student]:
        return self.search(term, ("name", "course", "email"))


class CourseStore(Store[Course]):
    def __init__(self, db: Session):
        super().__init__(db, Course)

    def by_name(self) -> List[Course]:
        return self.find_all(Course.name.asc())
