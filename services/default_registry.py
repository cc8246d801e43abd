"""
Collections where at most one item per owner carries a default flag
"""

import logging
from typing import Any, Dict, List, Optional, TypeVar

from pydantic import BaseModel

from services.collection import Collection, require_key

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class DefaultFlaggedRegistry(Collection[T]):
    """
    Keeps `flag_field` true on at most one item per `owner_field` value.
    Every operation that raises a flag clears it on the owner's other items
    inside the same collection rewrite.
    """

    owner_field = "owner_id"
    flag_field = "is_default"

    def owner_of(self, item: T) -> Any:
        return getattr(item, self.owner_field)

    def is_flagged(self, item: T) -> bool:
        return bool(getattr(item, self.flag_field))

    def clear_siblings(self, items: List[T], owner: Any, keep_id: Optional[str] = None):
        for item in items:
            if self.owner_of(item) == owner and item.id != keep_id and self.is_flagged(item):
                setattr(item, self.flag_field, False)
                logger.debug(f"Cleared {self.flag_field} on {item.id}")

    def prepare_new(self, item: T, items: List[T]) -> T:
        if self.is_flagged(item):
            self.clear_siblings(items, self.owner_of(item))
        return item

    def prepare_update(self, current: T, updates: Dict[str, Any], items: List[T]) -> T:
        updated = self.merge(current, updates)
        if updates.get(self.flag_field) is True:
            self.clear_siblings(items, self.owner_of(updated), keep_id=updated.id)
        return updated

    async def set_default(self, item_id: str) -> T:
        require_key(item_id, f"{self.label} ID")
        async with self.mutate() as items:
            index = self.index_of(items, item_id)
            target = items[index]
            self.clear_siblings(items, self.owner_of(target), keep_id=item_id)
            setattr(target, self.flag_field, True)
        logger.info(f"{self.label} {item_id} is now the default")
        return target

    async def get_default(self, owner: str) -> Optional[T]:
        require_key(owner, "Owner ID")
        for item in await self.load():
            if self.owner_of(item) == owner and self.is_flagged(item):
                return item
        return None
