import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from categories_api import config, db
from categories_api.config import Settings
from categories_api.main import app as fastapi_app
from categories_api.models import GLOBAL_USER_ID, NO_PARENT
from categories_api.data_access import TransactionsDataAccess
from categories_api.tables import Base, CategoriesTable

FALLBACK_EXPENSE_ID = "other-expense"
FALLBACK_INCOME_ID = "other-income"


@pytest.fixture(autouse=True, scope="session")
def anyio_backend():
    return ("asyncio", {"use_uvloop": True})


@pytest.fixture
async def app(tmp_path, monkeypatch):
    monkeypatch.setattr(
        config,
        "settings",
        Settings(
            _env_file=None,
            fallback_expense_category_id=FALLBACK_EXPENSE_ID,
            fallback_income_category_id=FALLBACK_INCOME_ID,
        ),
    )
    await db.reset_engine()
    db.init_engine(f"sqlite+aiosqlite:///{tmp_path / 'categories.db'}")
    async with db.get_engine().begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
    await db.reset_engine()


@pytest.fixture
async def async_client(app):
    async with LifespanManager(app):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client


@pytest.fixture
def send_message(async_client):
    async def _send(message_type: str, payload: dict) -> dict:
        response = await async_client.post(
            "/messages", json={"type": message_type, "payload": payload}
        )
        assert response.status_code == 200
        return response.json()

    return _send


@pytest.fixture
def seed_category(app):
    async def _seed(
        *,
        name: str,
        user_id: str = GLOBAL_USER_ID,
        category_type: str = "Expense",
        parent_id: str = NO_PARENT,
        archived: bool = False,
        icon_id: int = 0,
    ) -> str:
        async with db.get_session_scope() as session:
            category = CategoriesTable(
                user_id=user_id,
                name=name,
                type=category_type,
                icon_id=icon_id,
                parent_id=parent_id,
                archived=archived,
            )
            session.add(category)
            await session.flush()
            return category.id

    return _seed


@pytest.fixture
def seed_transaction(app):
    async def _seed(*, user_id: str, category_id: str, amount_minor: int = 1000) -> str:
        async with db.get_session_scope() as session:
            transaction = await TransactionsDataAccess(session).create_transaction(
                user_id=user_id,
                category_id=category_id,
                amount_minor=amount_minor,
            )
            return transaction.id

    return _seed
