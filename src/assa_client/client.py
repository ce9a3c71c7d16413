"""
Клиент личного кабинета ASSA (Интертелеком)

Единая точка входа для CLI:
- login / is_logged_in
- statistic() - статистика трафика
- ip() - публичный IP
- is_speed_test_done() / report_speed_test() - тест скорости
"""

import logging
import random
from typing import Optional

from .endpoints import PATH_STATISTIC
from .geoip import lookup_public_ip
from .models import Credential, StatisticsSnapshot
from .parsers import parse_statistics_page
from .session import SessionManager
from .speedtest import SpeedTestProtocol
from .transport import PortalTransport

logger = logging.getLogger(__name__)


class AssaClient:
    """Клиент личного кабинета. Один экземпляр - одна сессия, вызовы строго последовательные."""

    def __init__(self,
                 credential: Credential,
                 transport: Optional[PortalTransport] = None,
                 rng: Optional[random.Random] = None):
        self.transport = transport if transport is not None else PortalTransport()
        self.session = SessionManager(credential, self.transport)
        self.speedtest = SpeedTestProtocol(self.session, rng)

    @property
    def is_logged_in(self) -> bool:
        """Залогинен ли текущий клиент"""
        return self.session.is_logged_in

    def login(self, ref_link: Optional[str] = None) -> str:
        return self.session.login(ref_link)

    def statistic(self, force_recheck: bool = False) -> StatisticsSnapshot:
        """
        Получает статистику трафика

        Args:
            force_recheck: Выполнить вход заново перед запросом

        Returns:
            StatisticsSnapshot
        """
        page = self.session.ensure_authenticated(
            self.transport.resolve(PATH_STATISTIC),
            force_recheck=force_recheck,
        )
        return parse_statistics_page(page)

    def ip(self) -> str:
        """Публичный IP текущего компьютера"""
        return lookup_public_ip(self.transport)

    def is_speed_test_done(self, force_recheck: bool = False) -> bool:
        return self.speedtest.is_speed_test_done(force_recheck)

    def report_speed_test(self, force_recheck: bool = False) -> bool:
        """True если отчёт отправлен, False если тест уже был сделан"""
        return self.speedtest.report_speed_test(force_recheck)

    def close(self):
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
