# shop_api/middleware/db_middleware.py

class DBSessionMiddleware:
    """Открывает сессию хранилища на запрос: request.state.db."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        database = scope["app"].state.database

        # убедимся, что state есть
        state = scope.setdefault("state", {})
        state["db"] = database.session()
        try:
            await self.app(scope, receive, send)
        finally:
            # закрываем сессию только после завершения запроса
            await state["db"].close()
