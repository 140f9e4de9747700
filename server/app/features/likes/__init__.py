"""
Лайки между пользователями.

- models: направленная связь liker -> likee
- crud: сохранение лайка и выборка связанных id (кто лайкнул / кого лайкнул)
- routes: POST /users/{user_id}/like/{recipient_id}
"""
