"""Generic CRUD service with validation hooks and error mapping."""

from __future__ import annotations

from typing import Any, Generic, Type, TypeVar

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from opsportal.extensions import db
from opsportal.services.errors import ConflictError, NotFoundError, PersistenceError

Model = TypeVar("Model", bound=db.Model)

PROTECTED_FIELDS = frozenset({'id', 'created_at', 'updated_at'})


class CRUDService(Generic[Model]):
    """Base CRUD service with common operations.

    Every write commits immediately. Integrity violations surface as
    ``ConflictError``; any other database failure is rolled back, logged and
    re-raised as ``PersistenceError`` carrying a user-facing message.
    """

    conflict_message = "A record with these values already exists"

    def __init__(self, model: Type[Model], label: str | None = None):
        """
        Initialize CRUD service.

        Args:
            model: SQLAlchemy model class
            label: Human readable name used in error messages
        """
        self.model = model
        self.model_name = model.__tablename__
        self.label = label or self.model_name.replace('_', ' ')

    # ------------------------------------------------------------------ reads

    def get_by_id(self, object_id: int) -> Model | None:
        return db.session.get(self.model, object_id)

    def get_or_404(self, object_id: int) -> Model:
        instance = self.get_by_id(object_id)
        if instance is None:
            raise NotFoundError(f"{self.label.capitalize()} not found")
        return instance

    def list_all(self, filters: dict[str, Any] | None = None, order_by: Any = None) -> list[Model]:
        """
        List all records.

        Args:
            filters: Equality filter criteria
            order_by: SQLAlchemy order_by clause or sequence of clauses

        Returns:
            List of model instances
        """
        query = db.select(self.model)

        if filters:
            query = query.filter_by(**filters)

        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                query = query.order_by(*order_by)
            else:
                query = query.order_by(order_by)

        return list(db.session.scalars(query).all())

    def count(self, *criteria) -> int:
        query = db.select(db.func.count()).select_from(self.model)
        if criteria:
            query = query.where(*criteria)
        return db.session.scalar(query) or 0

    # ----------------------------------------------------------------- writes

    def create(self, data: dict[str, Any]) -> Model:
        self._validate_create(data)
        instance = self.model(**data)
        db.session.add(instance)
        self._commit('create')
        return instance

    def update(self, instance: Model, data: dict[str, Any]) -> Model:
        self._validate_update(instance, data)
        for key, value in data.items():
            if hasattr(instance, key) and key not in PROTECTED_FIELDS:
                setattr(instance, key, value)
        self._commit('update')
        return instance

    def delete(self, instance: Model) -> None:
        db.session.delete(instance)
        self._commit('delete')

    def set_active(self, instance: Model, is_active: bool) -> Model:
        """Set the soft visibility flag; a no-op when the value is unchanged."""
        is_active = bool(is_active)
        if instance.is_active == is_active:
            return instance
        self._validate_activation(instance, is_active)
        instance.is_active = is_active
        self._commit('update', verb='update status of')
        return instance

    def toggle_active(self, instance: Model) -> Model:
        return self.set_active(instance, not instance.is_active)

    # ------------------------------------------------------------------ hooks

    def _validate_create(self, data: dict[str, Any]) -> None:
        """Override in subclasses; raise a ServiceError to reject."""

    def _validate_update(self, instance: Model, data: dict[str, Any]) -> None:
        """Override in subclasses; raise a ServiceError to reject."""

    def _validate_activation(self, instance: Model, is_active: bool) -> None:
        """Override in subclasses; raise a ServiceError to reject."""

    def _commit(self, action: str, verb: str | None = None) -> None:
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.warning(f"Integrity error on {action} {self.model_name}: {e.orig}")
            raise ConflictError(self._handle_integrity_error(e)) from e
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Failed to {action} {self.model_name}: {e}")
            raise PersistenceError(f"Failed to {verb or action} {self.label}") from e

    def _handle_integrity_error(self, error: IntegrityError) -> str:
        """Convert database integrity errors to user-friendly messages."""
        error_msg = str(error.orig).lower()
        if 'unique' in error_msg or 'duplicate' in error_msg:
            return self.conflict_message
        if 'not null' in error_msg:
            return "A required field is missing"
        return "Database constraint violation"


__all__ = ['CRUDService']
