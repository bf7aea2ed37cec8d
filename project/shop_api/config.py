# shop_api/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./shop.db"   # URL хранилища документов

    HOST: str = "127.0.0.1"
    PORT: int = 3000

    LOG_DIR: str = "log"        # корень для файлов логов
    LOG_PRINT: str = "1"
    LOG_PRINT_DB: str = "0"     # echo SQL в консоль

    PASSWORD_SCHEME: str = "sha256_crypt"

    # блокировка по клиенту для topup/discount/purchase
    SERIALIZE_WALLET_UPDATES: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
