# shop_api/routes/customer.py

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse
from typing import List, Optional

from shop_api.schemas.customer import (
    Customer,
    CustomerCreate,
    CustomerUpdate,
    DiscountRequest,
    PurchaseRequest,
    TopUpRequest,
)
from shop_api.schemas.order import Order
from shop_api.repositories.order import OrderRepository
from shop_api.services.customer import (
    customer_repository,
    create_customer_service,
    update_customer_service,
)
from shop_api.services.exceptions import WalletError
from shop_api.services.order import read_customer_orders_service
from shop_api.services.wallet import WalletService

router = APIRouter()


def wallet_service(request: Request) -> WalletService:
    """Сервис кошелька на сессии текущего запроса."""
    log = request.app.state.log
    return WalletService(
        customer_repository(request),
        OrderRepository(request.state.db, log),
        log,
        request.app.state.locks,
    )


def error_response(error: WalletError) -> PlainTextResponse:
    return PlainTextResponse(error.detail, status_code=error.status_code)


# ────────────── CREATE ──────────────
@router.post(
    "",
    response_model=Customer,
    status_code=status.HTTP_201_CREATED,
    summary="Создать клиента",
    responses={
        201: {"description": "Клиент создан, пароль сохранён в виде хэша"},
        422: {"description": "Неверные данные запроса"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def create_customer(request: Request, customer: CustomerCreate):
    try:
        return await create_customer_service(customer, request)
    except Exception as e:
        await request.app.state.log.log_error("customer", f"Ошибка при создании клиента: {str(e)}")
        raise


# ────────────── READ ALL ──────────────
@router.get(
    "",
    response_model=List[Customer],
    summary="Получить список клиентов",
)
async def read_customers(request: Request):
    customers = await customer_repository(request).find_all()
    await request.app.state.log.log_info("customer", f"{len(customers)} клиентов загружено")
    return customers


# ────────────── READ ONE ──────────────
@router.get(
    "/{id}",
    response_model=Optional[Customer],
    summary="Получить клиента по ID",
    response_description="Данные клиента или null, если его нет",
)
async def read_customer(id: str, request: Request):
    return await customer_repository(request).find_by_id(id)


# ────────────── UPDATE ──────────────
@router.put(
    "/{id}",
    response_model=Optional[Customer],
    summary="Обновить клиента",
    response_description="Обновлённый клиент или null, если его нет",
)
async def update_customer(id: str, customer_update: CustomerUpdate, request: Request):
    try:
        return await update_customer_service(id, customer_update, request)
    except Exception as e:
        await request.app.state.log.log_error("customer", f"Ошибка при обновлении клиента: {str(e)}", {"id": id})
        raise


# ────────────── DELETE ──────────────
@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить клиента",
    response_description="Тело ответа отсутствует, даже если клиента не было",
)
async def delete_customer(id: str, request: Request):
    try:
        await customer_repository(request).delete(id)
    except Exception as e:
        await request.app.state.log.log_error("customer", f"Ошибка при удалении клиента: {str(e)}", {"id": id})
        raise
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ────────────── TOP-UP ──────────────
@router.post(
    "/{id}/topup",
    response_model=Customer,
    summary="Пополнить кошелёк",
    responses={404: {"description": "Клиент не найден"}},
)
async def top_up(
    id: str,
    body: TopUpRequest,
    request: Request,
    service: WalletService = Depends(wallet_service),
):
    try:
        return await service.top_up(id, body.wallet_topup)
    except WalletError as e:
        return error_response(e)
    except Exception as e:
        await request.app.state.log.log_error("wallet", f"Ошибка при пополнении кошелька: {str(e)}", {"id": id})
        raise


# ────────────── DISCOUNT ──────────────
@router.post(
    "/{id}/discount",
    response_model=Customer,
    summary="Установить скидку клиента",
    responses={
        400: {"description": "rate_discount вне диапазона 0..100"},
        404: {"description": "Клиент не найден"},
    },
)
async def set_discount(
    id: str,
    body: DiscountRequest,
    request: Request,
    service: WalletService = Depends(wallet_service),
):
    try:
        return await service.set_discount(id, body.rate_discount)
    except WalletError as e:
        return error_response(e)
    except Exception as e:
        await request.app.state.log.log_error("wallet", f"Ошибка при установке скидки: {str(e)}", {"id": id})
        raise


# ────────────── PURCHASE ──────────────
@router.post(
    "/{id}/purchase",
    response_model=Order,
    summary="Покупка с оплатой из кошелька",
    responses={
        400: {"description": "Недостаточно средств"},
        404: {"description": "Клиент не найден"},
    },
)
async def purchase(
    id: str,
    body: PurchaseRequest,
    request: Request,
    service: WalletService = Depends(wallet_service),
):
    try:
        return await service.purchase(id, body.product_name, body.product_price)
    except WalletError as e:
        return error_response(e)
    except Exception as e:
        await request.app.state.log.log_error("wallet", f"Ошибка при покупке: {str(e)}", {"id": id})
        raise


# ────────────── ORDERS OF CUSTOMER ──────────────
@router.get(
    "/{id}/orders",
    response_model=List[Order],
    summary="Заказы клиента",
)
async def read_customer_orders(id: str, request: Request):
    try:
        return await read_customer_orders_service(id, request)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении заказов клиента: {str(e)}", {"id": id})
        raise
