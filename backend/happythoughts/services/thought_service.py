"""
Happy Thoughts API — Thought Service
=====================================

What:  CRUD, filtering and hearts for thoughts. All behavior is inherited from
       ResourceService; this module only declares what is specific to thoughts.

Recognized list filters:
    message   exact message text, case-insensitive
    hearts    exact number of hearts
    category  one of the ThoughtCategory values, case-insensitive
    date      thoughts created on or after this ISO 8601 date
"""

from happythoughts.models.thought import Thought
from happythoughts.schemas.thought import ThoughtResponse
from happythoughts.services.filters import FieldFilter, FilterKind
from happythoughts.services.resource_service import ResourceService


class ThoughtService(ResourceService[ThoughtResponse]):
    resource = "thought"
    resource_plural = "thoughts"
    model = Thought
    response_schema = ThoughtResponse
    counter_field = "hearts"
    filter_fields = (
        FieldFilter("message", "message", FilterKind.TEXT),
        FieldFilter("hearts", "hearts", FilterKind.INTEGER),
        FieldFilter("category", "category", FilterKind.TEXT),
        FieldFilter("date", "created_at", FilterKind.DATE_FROM),
    )
