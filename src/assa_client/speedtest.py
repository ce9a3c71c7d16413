"""
Тест скорости в личном кабинете ASSA

Портал требует периодически проходить тест скорости. Модуль проверяет,
пройден ли тест в текущем периоде, и при необходимости отправляет
сгенерированный отчёт вместо реального измерения.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .classifiers import speedtest_completed
from .endpoints import (
    PATH_SPEEDTEST,
    PATH_SPEEDTEST_APPLET,
    PATH_SPEEDTEST_FRAME,
    PATH_SPEEDTEST_REPORT,
    PATH_SPEEDTEST_UPLOAD,
)
from .geoip import lookup_public_ip
from .parsers import find_speedtest_status_text
from .session import SessionManager

logger = logging.getLogger(__name__)

# Диапазон значений отчёта [95, 295)
REPORT_VALUE_MIN = 95
REPORT_VALUE_SPAN = 200

REPORT_HASH = 'bb3ff9566d004a9437dc69ab09289bf0'


@dataclass(frozen=True)
class SpeedTestReport:
    """Сгенерированный результат теста: скорости в Мбит/с и задержка в мс."""
    download: int
    upload: int
    latency: int

    @classmethod
    def generate(cls, rng: random.Random) -> "SpeedTestReport":
        def value() -> int:
            return int(REPORT_VALUE_MIN + rng.random() * REPORT_VALUE_SPAN)

        return cls(download=value(), upload=value(), latency=value())

    def to_form(self, client_ip: str, host: str) -> Dict[str, Any]:
        """
        Формирует данные формы отчёта

        Args:
            client_ip: Публичный IP клиента
            host: Адрес портала (для serverurl/testurl)
        """
        return {
            'methodid': 1,
            'hash': REPORT_HASH,
            'serverport': 443,
            'download': self.download,
            'serverurl': host + PATH_SPEEDTEST_UPLOAD,
            'clientip': client_ip,
            'testurl': host + PATH_SPEEDTEST_APPLET,
            'serverid': 1,
            'upload': self.upload,
            'latency': self.latency,
            'customer': 'intertel',
            'testmethod': 'http',
        }


class SpeedTestProtocol:
    """Проверка и отправка теста скорости"""

    def __init__(self, session: SessionManager, rng: Optional[random.Random] = None):
        """
        Args:
            session: Менеджер сессии личного кабинета
            rng: Источник случайных чисел для отчёта (в тестах - с фиксированным seed)
        """
        self.session = session
        self.transport = session.transport
        self.rng = rng if rng is not None else random.Random()

    def is_speed_test_done(self, force_recheck: bool = False) -> bool:
        """
        Returns:
            True если тест скорости уже пройден в текущем периоде

        Raises:
            ParseError: если на странице нет блока статуса
        """
        self.session.ensure_authenticated(force_recheck=force_recheck)
        # Страница теста меняет состояние на сервере, ответ не нужен
        self.transport.get(PATH_SPEEDTEST)

        page = self.transport.get(PATH_SPEEDTEST_FRAME).text
        done = speedtest_completed(find_speedtest_status_text(page))
        logger.info(f"Тест скорости {'уже пройден' if done else 'не пройден'}")
        return done

    def report_speed_test(self, force_recheck: bool = False) -> bool:
        """
        Отправляет сгенерированный отчёт, если тест ещё не пройден

        Returns:
            True если отчёт отправлен, False если тест уже был сделан
        """
        if self.is_speed_test_done(force_recheck=force_recheck):
            return False

        ip = lookup_public_ip(self.transport)
        report = SpeedTestReport.generate(self.rng)
        logger.info(
            f"Отправляю отчёт: download={report.download}, upload={report.upload}, "
            f"latency={report.latency}, ip={ip}"
        )
        self.transport.request(PATH_SPEEDTEST_REPORT, report.to_form(ip, self.transport.host))
        logger.info("✅ Отчёт о тесте скорости отправлен")
        return True
