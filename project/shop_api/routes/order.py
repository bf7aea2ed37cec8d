# shop_api/routes/order.py

from fastapi import APIRouter, Request, status
from typing import List

from shop_api.schemas.order import OrderWithCustomer
from shop_api.services.order import read_orders_service

router = APIRouter()

# ────────────── READ ALL ──────────────
@router.get(
    "",
    response_model=List[OrderWithCustomer],
    status_code=status.HTTP_200_OK,
    summary="Получить список заказов",
    response_description="Все заказы с именем и email клиента",
    responses={
        200: {"description": "Список заказов успешно получен"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def read_orders(request: Request):
    try:
        return await read_orders_service(request)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении списка заказов: {str(e)}")
        raise
