from typing import Any, Type, TypeVar, Generic, Optional

from django.core.exceptions import ValidationError
from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    def __init__(self, model: Type[T]):
        self.model = model

    def _base_queryset(self) -> models.QuerySet:
        return self.model.objects.all()

    def get(self, **filters) -> Optional[T]:
        return self._base_queryset().filter(**filters).first()

    def find(self, **filters) -> Optional[T]:
        """Like ``get``, but malformed identifiers behave like misses."""
        try:
            return self.get(**filters)
        except (ValidationError, ValueError, TypeError):
            return None

    def get_by_id(self, raw_id: Any) -> Optional[T]:
        return self.find(id=raw_id)

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update(self, obj: T, **data) -> T:
        for k, v in data.items():
            setattr(obj, k, v)
        obj.save()
        return obj

    def delete(self, obj: T):
        obj.delete()
