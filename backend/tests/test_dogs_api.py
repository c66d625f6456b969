"""
Happy Thoughts API — /dogs Endpoint Tests
==========================================

What:  End-to-end tests for the Dogs API against the bundled seed data.

What we test:
    ✅ Text filters ignore case and combine with AND
    ✅ vaccinated: "true" in any case, everything else means false
    ✅ Lookup by name answers with the bare dog or {"error": "Dog not found"}
    ✅ Lists return every match unless a limit is given
    ✅ Create / like / patch / delete, then 404
"""

import pytest
import pytest_asyncio

from happythoughts.services.seed import reset_database


@pytest_asyncio.fixture
async def seeded_client(app, test_client):
    await reset_database(app.state.database)
    return test_client


def _names(response):
    return sorted(dog["name"] for dog in response.json()["response"])


class TestDogFilters:

    @pytest.mark.asyncio
    async def test_list_all_seeded(self, seeded_client):
        response = await seeded_client.get("/dogs")
        assert response.status_code == 200
        assert len(response.json()["response"]) == 10

    @pytest.mark.asyncio
    async def test_breed_filter_ignores_case(self, seeded_client):
        response = await seeded_client.get("/dogs", params={"breed": "labrador retriever"})
        assert _names(response) == ["Bella", "Daisy"]

    @pytest.mark.asyncio
    async def test_filters_combine(self, seeded_client):
        response = await seeded_client.get("/dogs", params={"breed": "Beagle", "color": "brown"})
        assert _names(response) == ["Buddy"]

    @pytest.mark.asyncio
    async def test_breed_is_exact_not_substring(self, seeded_client):
        response = await seeded_client.get("/dogs", params={"breed": "Retriever"})
        assert response.status_code == 404
        assert response.json()["response"] == []

    @pytest.mark.asyncio
    async def test_vaccinated_true_any_case(self, seeded_client):
        response = await seeded_client.get("/dogs", params={"vaccinated": "TRUE"})
        assert _names(response) == ["Bella", "Charlie", "Lucy", "Max", "Molly", "Rocky"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["false", "yes", "ture"])
    async def test_vaccinated_anything_else_is_false(self, seeded_client, value):
        response = await seeded_client.get("/dogs", params={"vaccinated": value})
        assert _names(response) == ["Buddy", "Cooper", "Daisy", "Luna"]

    @pytest.mark.asyncio
    async def test_age_filter(self, seeded_client):
        response = await seeded_client.get("/dogs", params={"age": "3"})
        assert _names(response) == ["Bella", "Rocky"]

    @pytest.mark.asyncio
    async def test_every_match_returned_without_limit(self, test_client):
        for i in range(25):
            response = await test_client.post(
                "/dogs", json={"name": f"Beagle {i}", "breed": "Beagle", "color": "Tricolor"}
            )
            assert response.status_code == 201

        everything = await test_client.get("/dogs", params={"breed": "beagle"})
        limited = await test_client.get("/dogs", params={"breed": "beagle", "limit": 10})

        assert len(everything.json()["response"]) == 25
        assert len(limited.json()["response"]) == 10

    @pytest.mark.asyncio
    async def test_empty_value_is_ignored(self, seeded_client):
        response = await seeded_client.get("/dogs", params={"breed": "", "color": ""})
        assert len(response.json()["response"]) == 10


class TestDogByName:

    @pytest.mark.asyncio
    async def test_bare_dog(self, seeded_client):
        response = await seeded_client.get("/dogs/name/bella")

        assert response.status_code == 200
        body = response.json()
        assert "success" not in body
        assert body["name"] == "Bella"
        assert body["breed"] == "Labrador Retriever"

    @pytest.mark.asyncio
    async def test_missing_dog(self, seeded_client):
        response = await seeded_client.get("/dogs/name/Snoopy")

        assert response.status_code == 404
        assert response.json() == {"error": "Dog not found"}


class TestDogWrites:

    @pytest.mark.asyncio
    async def test_create_and_like(self, test_client):
        created = await test_client.post(
            "/dogs",
            json={"name": "Pixel", "breed": "Corgi", "color": "Red", "age": 2, "vaccinated": True},
        )
        assert created.status_code == 201
        dog = created.json()["response"]
        assert dog["likes"] == 0

        liked = await test_client.post(f"/dogs/{dog['id']}/like")
        assert liked.json()["response"]["likes"] == 1

    @pytest.mark.asyncio
    async def test_patch_and_delete(self, seeded_client):
        bella = (await seeded_client.get("/dogs/name/Bella")).json()

        patched = await seeded_client.patch(f"/dogs/{bella['id']}", json={"vaccinated": False})
        assert patched.status_code == 200
        assert patched.json()["response"]["vaccinated"] is False
        assert patched.json()["response"]["breed"] == "Labrador Retriever"

        deleted = await seeded_client.delete(f"/dogs/{bella['id']}")
        assert deleted.status_code == 200
        assert (await seeded_client.get(f"/dogs/{bella['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_then_get_is_404(self, test_client):
        created = await test_client.post(
            "/dogs", json={"name": "Biscuit", "breed": "Pug", "color": "Fawn"}
        )
        dog_id = created.json()["response"]["id"]

        deleted = await test_client.delete(f"/dogs/{dog_id}")
        assert deleted.status_code == 200
        assert deleted.json()["response"]["name"] == "Biscuit"

        response = await test_client.get(f"/dogs/{dog_id}")
        assert response.status_code == 404
        assert response.json()["response"]["error"] == "not_found"
        assert (await test_client.delete(f"/dogs/{dog_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_missing_breed_is_500(self, test_client):
        response = await test_client.post("/dogs", json={"name": "Nameless", "color": "Grey"})
        assert response.status_code == 500
