"""
Модели данных клиента ASSA.

- Credential: номер телефона и пароль
- TrafficPacket: один пакет трафика из таблицы статистики
- StatisticsSnapshot: пакеты + использованный трафик, остаток вычисляется
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Credential:
    """Данные для входа в личный кабинет."""
    phone: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class TrafficPacket:
    """Пакет трафика: название, объём в МБ и дата окончания действия."""
    name: str
    count: float
    expires: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "count": self.count,
            "expires": self.expires.isoformat() if self.expires else None,
        }


@dataclass(frozen=True)
class StatisticsSnapshot:
    """Статистика трафика на момент запроса."""
    packets: Tuple[TrafficPacket, ...] = ()
    used: float = 0.0

    @property
    def free(self) -> float:
        """Остаток трафика: сумма пакетов минус использованное (всегда пересчитывается)."""
        return sum(packet.count for packet in self.packets) - self.used

    def to_dict(self) -> Dict[str, Any]:
        """
        Сериализует статистику для JSON вывода

        Returns:
            Словарь с ключами packets, used, free
        """
        return {
            "packets": [packet.to_dict() for packet in self.packets],
            "used": self.used,
            "free": self.free,
        }
