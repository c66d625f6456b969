"""
Happy Thoughts API — Dog Service
=================================

What:  CRUD, filtering and likes for dogs, plus the case-insensitive lookup by
       name that backs GET /dogs/name/{name}.
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from happythoughts.models.dog import Dog
from happythoughts.schemas.dog import DogResponse
from happythoughts.services.filters import FieldFilter, FilterKind
from happythoughts.services.resource_service import ResourceService

logger = logging.getLogger(__name__)


class DogService(ResourceService[DogResponse]):
    resource = "dog"
    resource_plural = "dogs"
    model = Dog
    response_schema = DogResponse
    counter_field = "likes"
    filter_fields = (
        FieldFilter("name", "name", FilterKind.TEXT),
        FieldFilter("breed", "breed", FilterKind.TEXT),
        FieldFilter("color", "color", FilterKind.TEXT),
        FieldFilter("vaccinated", "vaccinated", FilterKind.FLAG),
        FieldFilter("age", "age", FilterKind.INTEGER),
        FieldFilter("likes", "likes", FilterKind.INTEGER),
        FieldFilter("date", "created_at", FilterKind.DATE_FROM),
    )

    async def find_by_name(self, db: AsyncSession, name: str) -> Optional[DogResponse]:
        """
        First dog (oldest first) whose name matches, ignoring case.

        Returns None instead of raising: the route answers with the bare
        `{"error": "Dog not found"}` body rather than the standard envelope.
        """
        try:
            result = await db.execute(
                select(Dog)
                .where(func.lower(Dog.name) == name.strip().lower())
                .order_by(Dog.created_at)
                .limit(1)
            )
            dog = result.scalars().first()
        except Exception as e:
            raise self._wrap("retrieve", e, name=name)
        return self._to_response(dog) if dog is not None else None
