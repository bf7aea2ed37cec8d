import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# до импорта приложения: логи модуля main не должны попадать в рабочий каталог
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="shop_api_log_"))
os.environ.setdefault("LOG_PRINT", "0")

from shop_api.config import Settings
from shop_api.main import create_app


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}",
        LOG_DIR=str(tmp_path / "log"),
        LOG_PRINT="0",
    )


@pytest.fixture()
def client(settings):
    """TestClient с выполненным lifespan: хранилище подключено, таблицы созданы."""
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture()
def make_customer(client):
    def _make(**overrides):
        payload = {
            "name": "Ada",
            "email": "ada@example.com",
            "password": "s3cret-pass",
            "phone": "+1-555-0100",
        }
        payload.update(overrides)
        response = client.post("/customers", json=payload)
        assert response.status_code == 201
        return response.json()

    return _make


@pytest.fixture()
def stored_customer(client):
    """Читает запись клиента напрямую из хранилища (с хэшем пароля)."""
    from shop_api.models.customer import Customer

    def _fetch(customer_id):
        async def fetch():
            async with client.app.state.database.session() as db:
                return await db.get(Customer, customer_id)

        return client.portal.call(fetch)

    return _fetch
