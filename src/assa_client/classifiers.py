"""
Классификаторы результатов запросов к порталу.

Портал не отдаёт статусов API: на успех и на ошибку он отвечает 200 OK.
Состояние сервера определяется только по итоговому URL или тексту страницы,
и вся эта привязка собрана здесь.
"""

from typing import Optional

# Приветствие на странице теста скорости, когда тест уже пройден
SPEEDTEST_DONE_PREFIX = "Дякуємо вам"


def login_succeeded(final_url: Optional[str], expected_url: str) -> bool:
    """
    Проверяет, что вход прошёл успешно

    Args:
        final_url: URL после всех редиректов
        expected_url: URL страницы статистики

    Returns:
        True только если портал перенаправил на страницу статистики
    """
    return bool(final_url) and final_url == expected_url


def speedtest_completed(status_text: Optional[str]) -> bool:
    """Тест скорости уже сделан, если блок статуса начинается с благодарности."""
    return (status_text or '').strip().startswith(SPEEDTEST_DONE_PREFIX)
