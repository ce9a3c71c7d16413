"""
Исключения клиента ASSA.

Все ошибки ядра наследуются от AssaError, чтобы CLI мог обработать их
одним блоком и вернуть код выхода 1.
"""


class AssaError(Exception):
    """Базовое исключение клиента ASSA."""
    pass


class AuthenticationError(AssaError):
    """Вход не удался: портал не перенаправил на страницу статистики."""
    pass


class ParseError(AssaError):
    """На странице нет ожидаемой структуры (таблиц, строки, элемента)."""
    pass


class NetworkError(AssaError):
    """Ошибка сети или пустой ответ внешнего сервиса."""
    pass
