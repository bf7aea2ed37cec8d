# shop_api/utils/database.py

import secrets
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.orm import declarative_base

# ────────────── Base для моделей ──────────────
Base = declarative_base()  # базовый класс для всех записей


def new_object_id() -> str:
    """Непрозрачный идентификатор записи: 24 hex-символа."""
    return secrets.token_hex(12)


class Database:
    """
    Хэндл хранилища документов.
    Создаётся при старте приложения, кладётся в app.state.database
    и закрывается при остановке. Глобального движка нет.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self) -> None:
        """Создаёт асинхронный движок и фабрику сессий."""
        self.engine = create_async_engine(self.url, echo=self.echo)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Создаёт коллекции (таблицы), если ещё не созданы."""
        # импорт регистрирует записи в Base.metadata
        from shop_api.models import customer, order  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    def session(self) -> AsyncSession:
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        return self.session_factory()

    async def dispose(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None
