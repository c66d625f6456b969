"""
Happy Thoughts API — Database Reset & Seeding
==============================================

What:  Wipes the dogs and thoughts tables and reloads them from the JSON files
       bundled in happythoughts/data/.
When:  At startup when RESET_DB (or RESET_DATABASE) is true.

Users are left alone: a reset replaces sample content, not accounts.
"""

import json
import logging
from importlib import resources
from typing import Any, Dict, List

from sqlalchemy import delete

from happythoughts.database import Database
from happythoughts.models.dog import Dog
from happythoughts.models.thought import Thought

logger = logging.getLogger(__name__)

SEED_PACKAGE = "happythoughts.data"


def load_seed(filename: str) -> List[Dict[str, Any]]:
    """Read one of the bundled seed files."""
    text = resources.files(SEED_PACKAGE).joinpath(filename).read_text(encoding="utf-8")
    return json.loads(text)


async def reset_database(database: Database) -> Dict[str, int]:
    """
    Delete every dog and thought, then insert the seed records.

    Runs in one transaction: either the whole reseed lands or nothing changes.

    Returns:
        Number of records inserted per table, e.g. {"dogs": 10, "thoughts": 6}
    """
    await database.create_all()

    dogs = load_seed("dogs.json")
    thoughts = load_seed("thoughts.json")

    async with database.session_factory() as session:
        async with session.begin():
            await session.execute(delete(Dog))
            await session.execute(delete(Thought))
            session.add_all(Dog(**record) for record in dogs)
            session.add_all(Thought(**record) for record in thoughts)

    counts = {"dogs": len(dogs), "thoughts": len(thoughts)}
    logger.info("Database reset: seeded %d dogs and %d thoughts", counts["dogs"], counts["thoughts"])
    return counts
