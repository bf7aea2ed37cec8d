# shop_api/utils/security.py

"""
Модуль для хэширования паролей клиентов и проверки паролей.
Используется passlib; схема задаётся через PASSWORD_SCHEME (по умолчанию sha256_crypt).
"""

from passlib.context import CryptContext

from shop_api.config import settings

# deprecated="auto" - старые схемы помечаются устаревшими автоматически
pwd_context = CryptContext(schemes=[settings.PASSWORD_SCHEME], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Хэширует пароль. Открытый текст нигде не сохраняется.

    :param password: строка пароля клиента
    :return: хэш пароля
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Проверяет совпадение пароля с его хэшем.

    :param plain_password: строка пароля клиента
    :param hashed_password: хэш из хранилища
    :return: True если пароль совпадает с хэшем, иначе False
    """
    return pwd_context.verify(plain_password, hashed_password)
