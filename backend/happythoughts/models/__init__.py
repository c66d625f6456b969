"""
ORM models. Importing this package registers every table on Base.metadata.
"""

from happythoughts.models.dog import Dog
from happythoughts.models.thought import Thought
from happythoughts.models.user import User

__all__ = ["Dog", "Thought", "User"]
