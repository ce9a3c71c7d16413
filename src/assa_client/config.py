"""
Модуль для работы с конфигурацией клиента ASSA

Функции:
- Загрузка config.yaml (+ профили: config.prod.yaml, config.test.yaml)
- ENV-переопределения (префикс ASSA_CLIENT_, вложенность через __)
- Учётные данные из .env (ASSA_PHONE, ASSA_PASSWORD)
- Настройка логирования
"""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from dotenv import load_dotenv
import logging

logger = logging.getLogger(__name__)

ENV_PREFIX = 'ASSA_CLIENT_'
PROFILE_ENV = 'ASSA_CLIENT_ENV'

DEFAULT_CONFIG: Dict[str, Any] = {
    'portal': {
        'host': "https://assa.intertelecom.ua",
        'timeout': 30,
        'user_agent': (
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/59.0.3071.109 Safari/537.36"
        ),
    },
    'geoip': {
        'url': "https://freegeoip.net/json/?callback=?",
    },
    'logging': {
        'level': "INFO",
        'format': "%(asctime)s - %(levelname)s - %(message)s",
        'log_to_file': False,
        'log_file': "logs/assa_client.log",
    },
}


class Config:
    """Класс для работы с конфигурацией клиента"""

    def __init__(self, config_path: Optional[str] = None):
        """
        Инициализация конфигурации

        Args:
            config_path: Путь к файлу конфигурации
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            # Ищем config.yaml в текущей директории и выше
            current_dir = Path.cwd()
            config_path = current_dir / "config.yaml"

            while not config_path.exists() and current_dir.parent != current_dir:
                current_dir = current_dir.parent
                config_path = current_dir / "config.yaml"

            self.config_path = config_path

        self.config_data: Dict[str, Any] = {}
        self.env_data: Dict[str, Any] = {}

        self._load_config()
        self._load_env()
        self._apply_env_overrides()

    def _resolve_config_path(self) -> Path:
        env = os.getenv(PROFILE_ENV, '').lower().strip()
        root = self.config_path.parent
        if env == 'production':
            candidate = root / 'config.prod.yaml'
        elif env == 'testing':
            candidate = root / 'config.test.yaml'
        else:
            candidate = self.config_path
        if candidate.exists():
            return candidate
        return self.config_path

    def _load_config(self):
        """Загружает конфигурацию из YAML файла поверх значений по умолчанию"""
        self.config_data = self._get_default_config()
        self.config_path = self._resolve_config_path()
        if not self.config_path.exists():
            logger.debug(f"Файл конфигурации {self.config_path} не найден, используются значения по умолчанию")
            return
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Ошибка загрузки конфигурации: {e}")
            return
        self._merge(self.config_data, loaded)
        logger.debug(f"Конфигурация загружена: {self.config_path}")

    def _load_env(self):
        """Загружает переменные окружения из .env файла"""
        load_dotenv()
        self.env_data = {
            'ASSA_PHONE': os.getenv('ASSA_PHONE'),
            'ASSA_PASSWORD': os.getenv('ASSA_PASSWORD'),
        }

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _set_nested(self, data: Dict[str, Any], dotted: str, value: Any) -> None:
        cur = data
        keys = dotted.split('.')
        for k in keys[:-1]:
            if k not in cur or not isinstance(cur[k], dict):
                cur[k] = {}
            cur = cur[k]
        cur[keys[-1]] = value

    def _apply_env_overrides(self) -> None:
        """Переопределяет конфиг значениями из ENV (ASSA_CLIENT_*)."""
        for key, val in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            # Служебные переменные не являются ключами конфига
            if key in (PROFILE_ENV, 'ASSA_CLIENT_DEBUG'):
                continue
            tail = key[len(ENV_PREFIX):]
            dotted = tail.replace('__', '.').lower()
            parsed: Any = val
            if val.lower() in ('true', 'false'):
                parsed = (val.lower() == 'true')
            else:
                try:
                    if '.' in val:
                        parsed = float(val)
                    else:
                        parsed = int(val)
                except ValueError:
                    parsed = val
            self._set_nested(self.config_data, dotted, parsed)
        if os.getenv(PROFILE_ENV):
            logger.info(f"Активирован профиль: {os.getenv(PROFILE_ENV)}")

    def configure_logging(self, level: Optional[str] = None) -> None:
        """
        Настраивает корневой логгер по конфигурации

        Args:
            level: Уровень, перекрывающий logging.level (например, DEBUG)
        """
        level_name = str(level or self.get_logging_level()).upper()
        log_level = getattr(logging, level_name, logging.INFO)
        fmt = self.get_logging_format()

        handlers: List[logging.Handler] = []
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(fmt))
        handlers.append(console)

        if self.is_logging_to_file_enabled():
            log_file = Path(self.get_logging_file())
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                fh = logging.FileHandler(log_file, encoding='utf-8')
                fh.setFormatter(logging.Formatter(fmt))
                handlers.append(fh)
            except OSError as e:
                logger.warning(f"Не удалось открыть файл лога: {e}")

        logging.basicConfig(level=log_level, handlers=handlers, format=fmt, force=True)

    def _get_default_config(self) -> Dict[str, Any]:
        """Возвращает конфигурацию по умолчанию"""
        return copy.deepcopy(DEFAULT_CONFIG)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Получает значение конфигурации по ключу

        Args:
            key: Ключ в формате 'section.parameter'
            default: Значение по умолчанию

        Returns:
            Значение параметра или default
        """
        try:
            keys = key.split('.')
            value = self.config_data

            for k in keys:
                value = value[k]

            return value
        except (KeyError, TypeError):
            return default

    def get_env(self, key: str, default: Any = None) -> Any:
        """Получает значение переменной окружения, загруженной из .env"""
        value = self.env_data.get(key)
        return default if value is None else value

    def get_portal_host(self) -> str:
        """Получает адрес портала"""
        return str(self.get('portal.host', DEFAULT_CONFIG['portal']['host'])).rstrip('/')

    def get_portal_timeout(self) -> float:
        """Получает таймаут HTTP запросов"""
        return float(self.get('portal.timeout', 30))

    def get_user_agent(self) -> str:
        """Получает User-Agent браузера"""
        return self.get('portal.user_agent', DEFAULT_CONFIG['portal']['user_agent'])

    def get_geoip_url(self) -> str:
        return self.get('geoip.url', DEFAULT_CONFIG['geoip']['url'])

    def get_logging_level(self) -> str:
        return self.get('logging.level', "INFO")

    def get_logging_format(self) -> str:
        return self.get('logging.format', "%(asctime)s - %(levelname)s - %(message)s")

    def get_logging_file(self) -> str:
        return self.get('logging.log_file', "logs/assa_client.log")

    def is_logging_to_file_enabled(self) -> bool:
        """Проверяет, включено ли логирование в файл"""
        return bool(self.get('logging.log_to_file', False))


# Глобальный экземпляр конфигурации
config = Config()
