# shop_api/services/customer.py

from fastapi import Request

from shop_api.models.customer import Customer
from shop_api.repositories.customer import CustomerRepository
from shop_api.schemas.customer import CustomerCreate, CustomerUpdate
from shop_api.utils.security import hash_password


def customer_repository(request: Request) -> CustomerRepository:
    return CustomerRepository(request.state.db, request.app.state.log)


async def create_customer_service(customer: CustomerCreate, request: Request) -> Customer:
    """
    Создание клиента. Пароль хэшируется до сохранения.
    """
    fields = customer.model_dump(exclude={"password"})
    fields["password"] = hash_password(customer.password)
    return await customer_repository(request).create(**fields)


async def update_customer_service(id: str, customer_update: CustomerUpdate, request: Request) -> Customer | None:
    """
    Обновление клиента по ID.
    Пустой пароль не меняет сохранённый хэш. None если клиента нет.
    """
    fields = customer_update.model_dump(exclude_unset=True, exclude={"password"})
    if customer_update.password:
        fields["password"] = hash_password(customer_update.password)
    return await customer_repository(request).update(id, fields)
