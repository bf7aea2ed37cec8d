# shop_api/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
import uvicorn
from dotenv import load_dotenv
from contextlib import asynccontextmanager

# --- загрузка переменных окружения ---
load_dotenv()

from shop_api.config import Settings, settings as default_settings
from shop_api.utils.log import Log
from shop_api.utils.database import Database
from shop_api.utils.locks import KeyedLocks
from shop_api.middleware.db_middleware import DBSessionMiddleware
from shop_api.routes import customer, order


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    # --- sync логгер для раннего старта ---
    boot_log = Log(settings.LOG_DIR, settings.LOG_PRINT)

    # ────────────── Lifespan ──────────────
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        boot_log.log_info_sync(target="startup", message="lifespan: startup начат")

        # Хранилище: открываем при старте, закрываем при остановке
        database = Database(settings.DATABASE_URL, echo=settings.LOG_PRINT_DB == "1")
        await database.connect()
        await database.create_all()
        app.state.database = database
        boot_log.log_info_sync(target="startup", message="Хранилище подключено", data={"url": settings.DATABASE_URL})

        app.state.locks = KeyedLocks() if settings.SERIALIZE_WALLET_UPDATES else None
        if app.state.locks is None:
            boot_log.log_warning_sync(
                target="startup", message="Блокировка кошельков выключена, возможны потерянные обновления"
            )

        app.state.log = Log(settings.LOG_DIR, settings.LOG_PRINT)
        await app.state.log.log_info(target="startup", message="Async Log инициализирован")

        yield

        # shutdown
        await app.state.log.log_info(target="shutdown", message="Остановка приложения")
        await app.state.log.shutdown()
        await database.dispose()
        boot_log.log_info_sync(target="shutdown", message="Хранилище закрыто, Log завершён")

    # ────────────── Создаём FastAPI приложение ──────────────
    app = FastAPI(title="Customer Wallet API", lifespan=lifespan)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # DB middleware для request.state.db
    app.add_middleware(DBSessionMiddleware)

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        return "This is my API running"

    # ────────────── Подключение роутов ──────────────
    app.include_router(customer.router, prefix="/customers", tags=["customers"])
    app.include_router(order.router, prefix="/orders", tags=["orders"])

    return app


app = create_app()

# ────────────── Запуск uvicorn ──────────────
if __name__ == "__main__":
    uvicorn.run(
        "shop_api.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level="info",
    )
