"""
Happy Thoughts API — Reset & Seed Tests
========================================

What we test:
    ✅ Bundled seed files load
    ✅ reset_database replaces dogs and thoughts and leaves users alone
"""

import pytest
from sqlalchemy import func, select

from happythoughts.models.dog import Dog
from happythoughts.models.thought import Thought
from happythoughts.models.user import User
from happythoughts.services.seed import load_seed, reset_database


def test_seed_files_load():
    dogs = load_seed("dogs.json")
    thoughts = load_seed("thoughts.json")
    assert len(dogs) == 10
    assert {"name", "breed", "color", "age", "vaccinated"} <= set(dogs[0])
    assert all(5 <= len(t["message"]) <= 140 for t in thoughts)


async def _count(database, model):
    async with database.session_factory() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.mark.asyncio
async def test_reset_is_repeatable(app, register_user):
    database = app.state.database
    await register_user()

    first = await reset_database(database)
    second = await reset_database(database)

    assert first == second == {"dogs": 10, "thoughts": 6}
    assert await _count(database, Dog) == 10
    assert await _count(database, Thought) == 6
    assert await _count(database, User) == 1


@pytest.mark.asyncio
async def test_reset_removes_posted_thoughts(app, test_client):
    await test_client.post("/thoughts", json={"message": "Gone after the reset"})

    await reset_database(app.state.database)

    response = await test_client.get("/thoughts", params={"message": "gone after the reset"})
    assert response.status_code == 404
