"""
Generic keyed collection over a document store

A Collection loads the whole stored array, validates it into pydantic
aggregates, and writes the whole array back. All mutations go through
`mutate()`, which holds the collection's writer lock from read to write so
concurrent requests in this process cannot overwrite each other.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from database.store import DocumentStore
from utils.exceptions import (
    DuplicateError,
    NotFoundError,
    StoreUnavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def field_value(item: BaseModel, path: str) -> Any:
    """Resolve a dotted attribute path, returning None past a missing link"""
    value: Any = item
    for part in path.split("."):
        if value is None:
            return None
        value = getattr(value, part, None)
    return value


def require_key(value: Optional[str], label: str) -> str:
    if not value:
        raise ValidationError(f"{label} is required")
    return value


class Collection(Generic[T]):
    """Keyed-by-id CRUD over one named collection"""

    # Dotted attribute paths that must be non-empty on create
    required_fields: Iterable[str] = ("id",)
    # Fields a partial update may never change
    immutable_fields: Iterable[str] = ("id",)

    def __init__(self, store: DocumentStore, name: str, model: Type[T], label: str):
        self.store = store
        self.name = name
        self.model = model
        self.label = label

    # --- persistence -------------------------------------------------------

    async def load(self) -> List[T]:
        raw = await self.store.read(self.name)
        try:
            return [self.model.model_validate(doc) for doc in raw]
        except PydanticValidationError as e:
            logger.error(f"Stored {self.name} failed validation: {e}")
            raise StoreUnavailable(f"Stored {self.name} data is malformed")

    async def save(self, items: List[T]) -> None:
        await self.store.write(self.name, [item.to_document() for item in items])

    @asynccontextmanager
    async def mutate(self):
        """
        Yield a freshly loaded, mutable list of aggregates and persist it on
        clean exit. Nothing is written if the block raises.
        """
        async with self.store.lock(self.name):
            items = await self.load()
            yield items
            await self.save(items)

    # --- helpers -----------------------------------------------------------

    def validate_required(self, item: T) -> None:
        missing = [path for path in self.required_fields if not field_value(item, path)]
        if missing:
            raise ValidationError(
                f"Missing required {self.label.lower()} fields: {', '.join(missing)}"
            )

    def index_of(self, items: List[T], item_id: str) -> int:
        for index, item in enumerate(items):
            if item.id == item_id:
                return index
        raise NotFoundError(f"{self.label} not found")

    def field_names(self, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Key a partial update by field name, accepting camelCase aliases"""
        aliases = {
            info.alias: name
            for name, info in self.model.model_fields.items()
            if info.alias
        }
        return {aliases.get(key, key): value for key, value in updates.items()}

    def merge(self, current: T, updates: Dict[str, Any]) -> T:
        """Apply a partial update and re-validate the result"""
        updates = self.field_names(updates)
        blocked = [key for key in updates if key in self.immutable_fields]
        if blocked:
            raise ValidationError(f"Cannot update {', '.join(blocked)}")
        try:
            return self.model.model_validate({**current.model_dump(), **updates})
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {self.label.lower()} update: {e}")

    # --- queries -----------------------------------------------------------

    async def get_all(self) -> List[T]:
        return await self.load()

    async def get_by_id(self, item_id: str) -> Optional[T]:
        require_key(item_id, f"{self.label} ID")
        for item in await self.load():
            if item.id == item_id:
                return item
        return None

    async def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        return [item for item in await self.load() if predicate(item)]

    async def filter_by(self, path: str, value: Any, label: str) -> List[T]:
        """Items whose `path` equals `value`; `label` names the key in errors"""
        require_key(value, label)
        return await self.filter(lambda item: field_value(item, path) == value)

    # --- mutations ---------------------------------------------------------

    def prepare_new(self, item: T, items: List[T]) -> T:
        """Hook run under the lock before a new item is appended"""
        return item

    async def create(self, item: T) -> T:
        self.validate_required(item)
        async with self.mutate() as items:
            if any(existing.id == item.id for existing in items):
                raise DuplicateError(f"{self.label} with this ID already exists")
            item = self.prepare_new(item, items)
            items.append(item)
        logger.info(f"Created {self.label.lower()} {item.id}")
        return item

    def prepare_update(self, current: T, updates: Dict[str, Any], items: List[T]) -> T:
        """Hook run under the lock to produce the updated item"""
        return self.merge(current, updates)

    async def update(self, item_id: str, updates: Dict[str, Any]) -> T:
        require_key(item_id, f"{self.label} ID")
        updates = self.field_names(updates)
        async with self.mutate() as items:
            index = self.index_of(items, item_id)
            updated = self.prepare_update(items[index], updates, items)
            items[index] = updated
        logger.info(f"Updated {self.label.lower()} {item_id}")
        return updated

    async def delete(self, item_id: str) -> T:
        require_key(item_id, f"{self.label} ID")
        async with self.mutate() as items:
            index = self.index_of(items, item_id)
            removed = items.pop(index)
        logger.info(f"Deleted {self.label.lower()} {item_id}")
        return removed
