"""
Tag repository: the tag catalog.
"""

from typing import Any

from sqlalchemy import select

from messaging.exceptions.mapper import query_error_handler
from .base_repository import BaseRepository


class TagRepository(BaseRepository):

    async def find_tags(self) -> list[Any]:
        """
        Retrieve every tag, ordered by name (id as tie-break) for stable listings.
        """
        t = self.mapping.tag
        started = self._started()

        query = select(t).order_by(t.name.asc(), t.id.asc())

        async with query_error_handler("find_tags", t.__name__):
            result = await self.db.execute(query)
            tags = list(result.scalars().all())

        self._log_success("find_tags", started, count=len(tags))
        return tags
