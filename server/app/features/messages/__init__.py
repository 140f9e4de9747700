"""
Личные сообщения: папки Inbox/Outbox/Unread, переписка двух пользователей,
мягкое удаление для каждой стороны отдельно.
"""
