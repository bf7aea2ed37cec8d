# shop_api/services/order.py

from fastapi import Request

from shop_api.models.order import Order as OrderModel
from shop_api.repositories.order import OrderRepository
from shop_api.schemas.customer import CustomerSummary
from shop_api.schemas.order import OrderWithCustomer


def order_repository(request: Request) -> OrderRepository:
    return OrderRepository(request.state.db, request.app.state.log)


async def read_orders_service(request: Request) -> list[OrderWithCustomer]:
    """
    Все заказы, к каждому подставлены имя и email клиента.
    """
    log = request.app.state.log
    rows = await order_repository(request).find_all_with_customer()

    orders = []
    for order, owner in rows:
        customer = CustomerSummary.model_validate(owner) if owner is not None else None
        orders.append(
            OrderWithCustomer.model_validate(order).model_copy(update={"customer": customer})
        )

    await log.log_info("order", f"{len(orders)} заказов загружено")
    return orders


async def read_customer_orders_service(customer_id: str, request: Request) -> list[OrderModel]:
    """
    Заказы одного клиента. Существование клиента не проверяется.
    """
    log = request.app.state.log
    orders = await order_repository(request).find_by_customer(customer_id)

    await log.log_info("order", f"{len(orders)} заказов клиента загружено", {"customer_id": customer_id})
    return orders
