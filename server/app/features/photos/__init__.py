"""
Фото профилей: файлы во внешнем хранилище, метаданные в БД.
"""
