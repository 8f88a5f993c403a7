from __future__ import annotations

import pytest
from datetime import timedelta
from uuid import uuid4

from fastapi.testclient import TestClient

from plategenie.app.config import Settings, get_settings
from plategenie.app.deps import (
    get_generation_service,
    get_recipe_repository,
    get_recipe_service,
    get_registration_service,
)
from plategenie.app.domain.errors import StoreError
from plategenie.app.main import app
from plategenie.app.services.generation_service import GenerationService
from plategenie.app.services.recipe_service import RecipeService
from plategenie.app.services.registration_service import RegistrationService
from plategenie.services.passwords import PasswordHasher
from tests.unit.stubs import (
    CompleterStub,
    IdentityProviderStub,
    MailSenderStub,
    PendingRegistrationRepositoryStub,
    RecipeRepositoryStub,
    UserRepositoryStub,
)


class AppHarness:
    def __init__(self) -> None:
        self.users = UserRepositoryStub()
        self.pending = PendingRegistrationRepositoryStub(self.users)
        self.mailer = MailSenderStub()
        self.recipes = RecipeRepositoryStub()
        self.completer = CompleterStub()
        self.registration = RegistrationService(
            users=self.users,
            pending=self.pending,
            hasher=PasswordHasher(rounds=4),
            mailer=self.mailer,
            identity=IdentityProviderStub(),
            otp_ttl=timedelta(minutes=5),
        )
        self.recipe_service = RecipeService(self.recipes)
        self.generation = GenerationService(self.completer)


@pytest.fixture
def harness():
    harness = AppHarness()
    app.dependency_overrides[get_registration_service] = lambda: harness.registration
    app.dependency_overrides[get_recipe_service] = lambda: harness.recipe_service
    app.dependency_overrides[get_generation_service] = lambda: harness.generation
    yield harness
    app.dependency_overrides.clear()


@pytest.fixture
def client(harness):
    return TestClient(app)


def _create_recipe(client: TestClient, owner: str = "owner-1") -> dict:
    response = client.post(
        "/api/recipes",
        json={"userId": owner, "title": "Dal", "description": "Lentil stew"},
    )
    assert response.status_code == 201
    return response.json()["recipe"]


class TestMisc:
    def test_root_greeting(self, client) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert response.text == "Hello from PlateGenie Backend!"

    def test_health(self, client) -> None:
        assert client.get("/health").json() == {"ok": True}


class TestAuthRoutes:
    def test_register_verify_login_flow(self, client, harness) -> None:
        response = client.post(
            "/api/register",
            json={"username": "ana", "email": "ana@example.com", "password": "secret1"},
        )
        assert response.status_code == 201

        code = harness.pending.get("ana@example.com").otp
        response = client.post("/api/verify-otp", json={"email": "ana@example.com", "otp": code})
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == "ana@example.com"
        assert "password" not in user

        response = client.post("/api/verify-otp", json={"email": "ana@example.com", "otp": code})
        assert response.status_code == 404

        response = client.post("/api/login", json={"email": "ana@example.com", "password": "secret1"})
        assert response.status_code == 200
        assert response.json()["user"]["id"] == user["id"]

    def test_register_conflict(self, client, harness) -> None:
        payload = {"username": "ana", "email": "ana@example.com", "password": "secret1"}
        client.post("/api/register", json=payload)
        code = harness.pending.get("ana@example.com").otp
        client.post("/api/verify-otp", json={"email": "ana@example.com", "otp": code})

        response = client.post("/api/register", json=payload)

        assert response.status_code == 409

    def test_register_missing_field(self, client) -> None:
        response = client.post("/api/register", json={"username": "ana", "email": "ana@example.com"})
        assert response.status_code == 400

    def test_delivery_failure_is_server_error(self, client, harness) -> None:
        harness.mailer.fail = True

        response = client.post(
            "/api/register",
            json={"username": "ana", "email": "ana@example.com", "password": "secret1"},
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Server error."

    def test_wrong_code(self, client, harness) -> None:
        client.post(
            "/api/register",
            json={"username": "ana", "email": "ana@example.com", "password": "secret1"},
        )
        code = harness.pending.get("ana@example.com").otp
        wrong = "000000" if code != "000000" else "000001"

        response = client.post("/api/verify-otp", json={"email": "ana@example.com", "otp": wrong})

        assert response.status_code == 400

    def test_bad_login(self, client) -> None:
        response = client.post("/api/login", json={"email": "nobody@example.com", "password": "x"})
        assert response.status_code == 401

    def test_google_login(self, client) -> None:
        response = client.post("/api/google-login", json={"code": "auth-code"})

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "cook@example.com"


class TestRecipeRoutes:
    def test_create_and_get(self, client) -> None:
        created = _create_recipe(client)

        response = client.get(f"/api/recipes/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Dal"
        assert body["type"] == "created"
        assert body["likes"] == []

    def test_get_unknown_and_malformed(self, client) -> None:
        assert client.get(f"/api/recipes/{uuid4()}").status_code == 404
        assert client.get("/api/recipes/not-an-id").status_code == 404

    def test_list_by_type(self, client) -> None:
        _create_recipe(client)

        assert len(client.get("/api/recipes/user/owner-1").json()) == 1
        assert client.get("/api/recipes/user/owner-1?type=saved").json() == []

    def test_update_by_non_owner(self, client) -> None:
        created = _create_recipe(client)

        response = client.put(
            f"/api/recipes/{created['id']}",
            json={"userId": "other", "title": "X", "description": "Y"},
        )

        assert response.status_code == 403

    def test_like_comment_and_delete(self, client) -> None:
        created = _create_recipe(client)
        recipe_id = created["id"]

        liked = client.post(f"/api/recipes/{recipe_id}/like", json={"userId": "fan"}).json()
        assert liked["likes"] == ["fan"]

        response = client.post(
            f"/api/recipes/{recipe_id}/comments",
            json={"userId": "fan", "commentText": "Tasty"},
        )
        assert response.status_code == 201
        comment = response.json()["comments"][0]
        assert comment["username"] == "Anonymous User"

        response = client.put(
            f"/api/recipes/{recipe_id}/comments/{comment['id']}",
            json={"userId": "owner-1", "commentText": "Hijacked"},
        )
        assert response.status_code == 403

        response = client.request(
            "DELETE",
            f"/api/recipes/{recipe_id}/comments/{comment['id']}",
            json={"userId": "fan"},
        )
        assert response.status_code == 200
        assert response.json()["comments"] == []

        assert client.delete(f"/api/recipes/{recipe_id}?userId=fan").status_code == 403
        assert client.delete(f"/api/recipes/{recipe_id}?userId=owner-1").status_code == 200
        assert client.get(f"/api/recipes/{recipe_id}").status_code == 404

    def test_store_failure_is_server_error(self, client, harness) -> None:
        def broken(recipe_id):
            raise StoreError("recipes.get", "connection refused")

        harness.recipes.get = broken

        response = client.get(f"/api/recipes/{uuid4()}")

        assert response.status_code == 500
        assert response.json()["detail"] == "Server error."


class TestGenerationRoutes:
    def test_generate_plan(self, client, harness) -> None:
        harness.completer.response = (
            '[{"name": "Fried Rice", "ingredients": ["rice", "egg"], "instructions": "Fry.",'
            ' "cookingTime": "20 mins", "difficulty": "Easy"}]'
        )

        response = client.post("/api/generate-plan", json={"ingredients": ["rice", "egg"]})

        assert response.status_code == 200
        assert response.json()[0]["name"] == "Fried Rice"
        assert response.json()[0]["cookingTime"] == "20 mins"

    def test_generate_plan_without_ingredients(self, client) -> None:
        response = client.post("/api/generate-plan", json={"ingredients": []})
        assert response.status_code == 400

    def test_unparsable_model_output(self, client, harness) -> None:
        harness.completer.response = "I cannot do that."

        response = client.post("/api/generate-plan", json={"ingredients": ["rice"]})

        assert response.status_code == 500
        assert "Failed to generate recipes" in response.json()["detail"]

    def test_save_generated(self, client) -> None:
        response = client.post(
            "/api/save",
            json={
                "userId": "owner-1",
                "name": "Fried Rice",
                "ingredients": ["rice"],
                "instructions": "Fry.",
            },
        )

        assert response.status_code == 201
        saved = response.json()["savedRecipe"]
        assert saved["type"] == "saved"
        assert saved["cookingTime"] == "N/A"

        listed = client.get("/api/recipes/user/owner-1?type=saved").json()
        assert [item["id"] for item in listed] == [saved["id"]]

    def test_malformed_instructions_shrink_the_list(self, client, harness) -> None:
        harness.completer.response = (
            '[{"name": "Fried Rice", "ingredients": ["rice"], "instructions": [{"step": 1, "text": "Fry."}],'
            ' "cookingTime": "20 mins", "difficulty": "Easy"},'
            ' {"name": "Boiled Egg", "ingredients": ["egg"], "instructions": "Boil.",'
            ' "cookingTime": "10 mins", "difficulty": "Easy"}]'
        )

        response = client.post("/api/generate-plan", json={"ingredients": ["rice", "egg"]})

        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["Boiled Egg"]


class TestSaveWithoutModelKey:
    def test_save_does_not_need_gemini(self) -> None:
        recipes = RecipeRepositoryStub()
        app.dependency_overrides[get_recipe_repository] = lambda: recipes
        app.dependency_overrides[get_settings] = lambda: Settings(GEMINI_API_KEY="")
        try:
            client = TestClient(app)

            response = client.post(
                "/api/save",
                json={"userId": "owner-1", "name": "Fried Rice", "ingredients": ["rice"], "instructions": "Fry."},
            )
            unconfigured = client.post("/api/generate-plan", json={"ingredients": ["rice"]})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 201
        assert len(recipes.recipes) == 1
        assert unconfigured.status_code == 500
        assert unconfigured.json()["detail"] == "Recipe generation is not configured."
