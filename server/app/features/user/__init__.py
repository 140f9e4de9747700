"""
Управление профилями пользователей.

Этот модуль содержит:
- models: модель пользователя (SQLAlchemy)
- schemas: схемы API и параметры выборки (Pydantic)
- crud: операции с БД, включая фильтрацию и пагинацию списка
- activity: отметка последней активности после запроса
- routes: маршруты /users, /users/{id}
"""
