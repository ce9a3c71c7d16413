"""
ASSA Client - неофициальный клиент личного кабинета Интертелеком (assa.intertelecom.ua)

Этот модуль предоставляет инструменты для:
- Входа в личный кабинет по номеру телефона и паролю
- Получения статистики трафика (пакеты, использованный трафик, остаток)
- Проверки и симуляции теста скорости
"""

__version__ = "0.1.0"

from .client import AssaClient
from .errors import AssaError, AuthenticationError, NetworkError, ParseError
from .models import Credential, StatisticsSnapshot, TrafficPacket
from .session import AuthState

__all__ = [
    "AssaClient",
    "AssaError",
    "AuthenticationError",
    "AuthState",
    "Credential",
    "NetworkError",
    "ParseError",
    "StatisticsSnapshot",
    "TrafficPacket",
]
