"""
Функциональные возможности приложения - бизнес-логика.

Этот модуль содержит все функциональные модули:
- system: системные функции (здоровье)
- user: профили пользователей, список с фильтрами
- likes: лайки
- photos: фото профилей
- messages: личные сообщения
"""
