"""
Определение публичного IP через внешний geo-IP сервис.

Ответ может быть обёрнут в JSONP (callback(...)), поэтому IP ищется
регулярным выражением по сырому тексту, без разбора JSON.
"""

import logging
import re
from typing import Optional

from .config import config
from .errors import NetworkError

logger = logging.getLogger(__name__)

IP_PATTERN = re.compile(r'"ip":"(\d{0,3}\.\d{0,3}\.\d{0,3}\.\d{0,3})"')


def extract_ip(body: Optional[str]) -> str:
    """
    Извлекает IPv4 из ответа geo-IP сервиса

    Raises:
        NetworkError: если в ответе нет поля "ip"
    """
    match = IP_PATTERN.search(body or '')
    if not match or not match.group(1):
        raise NetworkError("Failed to get ip")
    return match.group(1)


def lookup_public_ip(transport, url: Optional[str] = None) -> str:
    """
    Запрашивает публичный IP текущего компьютера

    Args:
        transport: PortalTransport (запрос идёт через ту же сессию)
        url: Адрес geo-IP сервиса (по умолчанию geoip.url из конфигурации)

    Returns:
        IP адрес строкой
    """
    response = transport.get(url or config.get_geoip_url())
    ip = extract_ip(response.text)
    logger.info(f"Публичный IP: {ip}")
    return ip
