#!/usr/bin/env python3
"""
Интерфейс командной строки для клиента ASSA

Действия:
1. --check-speedtest - проверить, сделан ли тест скорости
2. --speedtest - симулировать тест скорости
3. --statistic - показать статистику (в JSON)
4. --pretty-statistic - показать статистику в читаемом формате
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from .client import AssaClient
from .config import config
from .errors import AssaError
from .models import Credential, StatisticsSnapshot

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assa",
        description="Клиент личного кабинета ASSA (Интертелеком)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:
  assa -u 0941234567 -p secret --pretty-statistic
  assa --check-speedtest               # номер и пароль из ASSA_PHONE/ASSA_PASSWORD (.env)
        """
    )
    parser.add_argument('--user', '-u', help='Номер телефона')
    parser.add_argument('--password', '-p', help='Пароль')

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument('--check-speedtest', '-c', action='store_true',
                         help='Проверить, сделан ли тест скорости')
    actions.add_argument('--speedtest', '-t', action='store_true',
                         help='Симулировать тест скорости')
    actions.add_argument('--statistic', '-s', action='store_true',
                         help='Показать статистику (в JSON)')
    actions.add_argument('--pretty-statistic', '-r', action='store_true',
                         help='Показать статистику в читаемом формате')
    return parser


def _format_mb(value: float) -> str:
    """Число как есть, без ".0" у целых (738.0 -> "738", 12.345 -> "12.345")"""
    return str(int(value)) if float(value).is_integer() else str(value)


def format_pretty_statistic(stats: StatisticsSnapshot) -> str:
    """Статистика в читаемом виде, даты в формате YYYY-MM-DD"""
    lines = [
        f"Осталось трафика: {_format_mb(stats.free)}МБ",
        f"Использовано трафика в текущей сессии: {_format_mb(stats.used)}МБ",
        "Пакеты трафика:",
    ]
    for packet in stats.packets:
        expires = f" по {packet.expires:%Y-%m-%d}" if packet.expires else ''
        lines.append(f"\t{_format_mb(packet.count)}МБ{expires} ({packet.name})")
    return "\n".join(lines)


def format_json_statistic(stats: StatisticsSnapshot) -> str:
    return json.dumps(stats.to_dict(), ensure_ascii=False)


def run_action(client: AssaClient, args: argparse.Namespace) -> str:
    """Выполняет выбранное действие и возвращает текст для вывода"""
    if args.check_speedtest:
        return 'true' if client.is_speed_test_done() else 'false'
    if args.speedtest:
        return 'success' if client.report_speed_test() else 'skipped'
    if args.statistic:
        return format_json_statistic(client.statistic())
    return format_pretty_statistic(client.statistic())


def main(argv: Optional[List[str]] = None) -> int:
    """Основная функция CLI"""
    level = 'DEBUG' if os.environ.get('ASSA_CLIENT_DEBUG') == '1' else None
    config.configure_logging(level)

    parser = build_parser()
    args = parser.parse_args(argv)

    user = args.user or config.get_env('ASSA_PHONE')
    password = args.password or config.get_env('ASSA_PASSWORD')
    has_action = args.check_speedtest or args.speedtest or args.statistic or args.pretty_statistic
    if not user or not password or not has_action:
        parser.print_help()
        return 1

    with AssaClient(Credential(user, password)) as client:
        try:
            output = run_action(client, args)
        except AssaError as e:
            logger.error(f"❌ {type(e).__name__}: {e}")
            return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
