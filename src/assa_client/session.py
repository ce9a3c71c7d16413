"""
Управление сессией личного кабинета ASSA

Портал не имеет отдельного запроса "авторизован ли я": результат входа
определяется по итоговому URL после редиректов, а дальше состояние
считается верным, пока вызывающий код не пометит его устаревшим.
"""

import logging
from enum import Enum
from typing import Optional

from .classifiers import login_succeeded
from .endpoints import PATH_LOGIN, PATH_STATISTIC
from .errors import AuthenticationError
from .models import Credential
from .transport import PortalTransport

logger = logging.getLogger(__name__)


class AuthState(Enum):
    """Состояние авторизации сессии."""
    NEVER_AUTHENTICATED = "never_authenticated"
    AUTHENTICATED = "authenticated"
    ASSUMED_STALE = "assumed_stale"


class SessionManager:
    """Класс для входа в личный кабинет и ленивой переавторизации"""

    def __init__(self, credential: Credential, transport: PortalTransport):
        """
        Инициализация менеджера сессии

        Args:
            credential: Номер телефона и пароль
            transport: Транспорт, владеющий cookies сессии
        """
        self.credential = credential
        self.transport = transport
        self.state = AuthState.NEVER_AUTHENTICATED

    @property
    def statistic_url(self) -> str:
        return self.transport.resolve(PATH_STATISTIC)

    @property
    def is_logged_in(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    def mark_stale(self) -> None:
        """Помечает сессию устаревшей: следующий ensure_authenticated выполнит вход заново"""
        if self.state is AuthState.AUTHENTICATED:
            logger.info("Сессия помечена как устаревшая")
            self.state = AuthState.ASSUMED_STALE

    def login(self, ref_link: Optional[str] = None) -> str:
        """
        Выполняет попытку входа в систему

        Args:
            ref_link: Ссылка, на которую портал перенаправит после успешного входа

        Returns:
            Текст страницы с результатом входа (при успехе - страница статистики)
        """
        logger.info(f"Вход в личный кабинет для {self.credential.phone}")
        response = self.transport.request(PATH_LOGIN, {
            'phone': self.credential.phone,
            'pass': self.credential.password,
            'ref_link': ref_link or self.statistic_url,
            'js': 1,
        })

        if login_succeeded(response.url, self.statistic_url):
            self.state = AuthState.AUTHENTICATED
            logger.info("✅ Вход выполнен")
        else:
            # Прежней авторизации после неудачного входа доверять нельзя
            if self.state is AuthState.AUTHENTICATED:
                self.state = AuthState.ASSUMED_STALE
            logger.warning(f"❌ Вход не удался, итоговый URL: {response.url}")
        return response.text

    def ensure_authenticated(self,
                             target: Optional[str] = None,
                             force_recheck: bool = False) -> Optional[str]:
        """
        Гарантирует авторизацию перед запросом

        Args:
            target: Страница, которую нужно получить после входа
            force_recheck: Выполнить вход заново, даже если сессия считается активной

        Returns:
            Текст страницы target (или страницы после входа), None если target не задан
            и вход не понадобился

        Raises:
            AuthenticationError: если вход не удался
        """
        if force_recheck and self.state is AuthState.AUTHENTICATED:
            self.state = AuthState.ASSUMED_STALE

        if self.state is not AuthState.AUTHENTICATED:
            body = self.login(target or self.statistic_url)
            if not self.is_logged_in:
                raise AuthenticationError("Failed to login")
            return body

        if target is None:
            return None
        return self.transport.request(target).text
