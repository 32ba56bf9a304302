import unittest
from datetime import datetime

from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from mealflow.api.dependencies.planner import get_reference_time
from mealflow.core import settings
from mealflow.core.token import create_token_for_user
from mealflow.database.events import create_db_pool, create_tables
from mealflow.main import app
from mealflow.models.user import RoleEnum
from mealflow.schemas.recipe import RecipeCreate, RecipeOut
from mealflow.schemas.user import UserFromDB, UserInCreate
from mealflow.services.recipe import create_recipe_service
from mealflow.services.users import create_user

# a Wednesday; its week runs from 2025-03-10 to 2025-03-16
REFERENCE_TIME = datetime(2025, 3, 12, 15, 30)


class ApiTestCase(unittest.IsolatedAsyncioTestCase):
    """Runs the app against a fresh in-memory database for every test."""

    reference_time = REFERENCE_TIME

    async def asyncSetUp(self):
        self.engine, self.pool = create_db_pool(
            "sqlite+aiosqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        await create_tables(self.engine)

        app.state.pool = self.pool
        app.dependency_overrides[get_reference_time] = lambda: self.reference_time
        self.client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    async def asyncTearDown(self):
        await self.client.aclose()
        app.dependency_overrides.clear()
        await self.engine.dispose()

    async def create_user(
        self,
        email: str,
        name: str = "Test User",
        password: str = "secret123",
        role: RoleEnum = RoleEnum.USER,
    ) -> UserFromDB:
        async with self.pool() as session:
            return await create_user(
                session,
                UserInCreate(name=name, email=email, password=password),
                role=role,
            )

    async def create_admin(self, email: str = "admin@example.com") -> UserFromDB:
        return await self.create_user(email, name="Admin User", role=RoleEnum.ADMIN)

    async def create_recipe(self, owner: UserFromDB, **fields) -> RecipeOut:
        fields.setdefault("instructions", ["Cook it"])
        fields.setdefault("ingredients", [])
        async with self.pool() as session:
            return await create_recipe_service(session, RecipeCreate(**fields), owner.id)

    @staticmethod
    def auth(user: UserFromDB) -> dict:
        token = create_token_for_user(user, settings.secret_key.get_secret_value(), 60)
        return {"Authorization": f"Bearer {token.access_token}"}
