"""
HTTP транспорт для портала ASSA

Предоставляет:
- Общую сессию requests (cookies сохраняются между запросами)
- POST по умолчанию, переход по всем редиректам
- Постоянный User-Agent браузера
- Разрешение относительных путей относительно адреса портала
"""

import logging
from typing import Any, Dict, Optional

import requests

from .config import config
from .errors import NetworkError

logger = logging.getLogger(__name__)


class PortalTransport:
    """Класс для выполнения запросов к порталу через одну сессию"""

    def __init__(self,
                 host: Optional[str] = None,
                 user_agent: Optional[str] = None,
                 timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        """
        Инициализация транспорта

        Args:
            host: Адрес портала (по умолчанию из config.yaml)
            user_agent: User-Agent для всех запросов
            timeout: Таймаут запроса в секундах
            session: Готовая сессия requests (используется в тестах)
        """
        self.host = (host or config.get_portal_host()).rstrip('/')
        self.timeout = timeout if timeout is not None else config.get_portal_timeout()

        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent or config.get_user_agent()
        })

    def resolve(self, path: str) -> str:
        """Возвращает абсолютный URL: пути со схемой не меняются"""
        if path.startswith('http'):
            return path
        return self.host + path

    def request(self,
                path: str,
                form: Optional[Dict[str, Any]] = None,
                method: str = 'POST') -> requests.Response:
        """
        Выполняет запрос к порталу

        Args:
            path: Путь на портале или абсолютный URL
            form: Данные формы (application/x-www-form-urlencoded)
            method: HTTP метод

        Returns:
            Ответ после всех редиректов

        Raises:
            NetworkError: при ошибке сети или HTTP статусе ошибки
        """
        url = self.resolve(path)
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method,
                url,
                data=form or {},
                allow_redirects=True,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Ошибка сети при запросе {url}: {e}")
            raise NetworkError(f"Request to {url} failed: {e}") from e

        logger.debug(f"Ответ {response.status_code}, итоговый URL: {response.url}")
        return response

    def get(self, path: str) -> requests.Response:
        return self.request(path, method='GET')

    def close(self):
        """Закрывает сессию"""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
