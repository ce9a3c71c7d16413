"""
Парсинг страниц портала ASSA

Предоставляет функционал для:
- Извлечения текста ячеек таблиц
- Разбора страницы статистики (две таблицы .assa) в StatisticsSnapshot
- Поиска блока статуса на странице теста скорости

Все предположения о вёрстке портала собраны в PAGE_LAYOUT: при изменении
страниц правится только эта таблица.
"""

import logging
import re
from datetime import date
from typing import Any, Dict, List, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from .errors import ParseError
from .models import StatisticsSnapshot, TrafficPacket

logger = logging.getLogger(__name__)

PAGE_LAYOUT: Dict[str, Any] = {
    # Страница статистики
    'statistic_table_selector': 'table.assa',
    'statistic_table_count': 2,
    'used_row_index': 24,
    'used_table_row_offset': 0,
    'packets_table_row_offset': 0,
    # "500 по 31.12.2024"
    'quota_delimiter': ' по ',
    'date_separator': '.',
    # Страница теста скорости (iframe)
    'speedtest_status_id': 'before-test',
}

# Число в начале строки ("12.5 МБ" -> 12.5)
LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(text: str) -> float:
    """
    Читает число в начале строки, десятичный разделитель - точка

    Raises:
        ValueError: если строка не начинается с числа
    """
    match = LEADING_NUMBER.match(text.strip())
    if not match:
        raise ValueError(f"Not a number: {text!r}")
    return float(match.group(0))


def extract_cell_text(cell: Tag) -> str:
    """
    Извлекает текст ячейки таблицы

    Если в ячейке ровно один дочерний элемент, берётся его текст,
    иначе текст самой ячейки. Результат всегда строка без пробелов по краям.
    """
    children = [child for child in cell.children if isinstance(child, Tag)]
    source = children[0] if len(children) == 1 else cell
    return (source.get_text() or '').strip()


def _table_rows(table: Tag, offset: int = 0) -> List[Tag]:
    """Строки первой секции таблицы (thead/tbody/tfoot) или самой таблицы."""
    sections = table.find_all(['thead', 'tbody', 'tfoot'], recursive=False)
    container = sections[0] if sections else table
    return container.find_all('tr', recursive=False)[offset:]


def _row_pair(row: Tag) -> Tuple[str, str]:
    """Первые две ячейки строки как (ключ, значение); отсутствующие - пустые строки."""
    cells = [extract_cell_text(cell) for cell in row.find_all(['td', 'th'], recursive=False)]
    key = cells[0] if len(cells) > 0 else ''
    value = cells[1] if len(cells) > 1 else ''
    return key, value


def parse_expiry_date(text: str) -> date:
    """
    Разбирает дату вида dd.mm.yyyy

    Raises:
        ParseError: если дата не состоит из трёх числовых компонент
    """
    parts = text.strip().split(PAGE_LAYOUT['date_separator'])
    if len(parts) != 3:
        raise ParseError(f"Unexpected date format: {text!r}")
    try:
        day, month, year = (int(part) for part in parts)
        return date(year, month, day)
    except ValueError as e:
        raise ParseError(f"Invalid date {text!r}: {e}") from e


def parse_quota_value(value: str) -> Tuple[float, date]:
    """
    Разбирает значение пакета "<объём> по <дата>"

    Returns:
        (объём в МБ, дата окончания)

    Raises:
        ValueError: если в строке нет разделителя " по " (строка не является пакетом)
        ParseError: если объём или дата не разбираются
    """
    components = value.split(PAGE_LAYOUT['quota_delimiter'])
    if len(components) != 2:
        raise ValueError(f"Not a quota value: {value!r}")
    try:
        count = parse_number(components[0])
    except ValueError as e:
        raise ParseError(f"Invalid quota amount in {value!r}") from e
    return count, parse_expiry_date(components[1])


def parse_used(table: Tag) -> float:
    """Читает использованный трафик из фиксированной строки первой таблицы."""
    rows = _table_rows(table, PAGE_LAYOUT['used_table_row_offset'])
    index = PAGE_LAYOUT['used_row_index']
    if len(rows) <= index:
        raise ParseError(f"Statistic table has {len(rows)} rows, row {index} expected")
    _, value = _row_pair(rows[index])
    try:
        return parse_number(value)
    except ValueError as e:
        raise ParseError(f"Invalid used traffic value: {value!r}") from e


def parse_packets(table: Tag) -> List[TrafficPacket]:
    """Разбирает таблицу пакетов; строки без " по " (итоги и т.п.) пропускаются."""
    packets = []
    for row in _table_rows(table, PAGE_LAYOUT['packets_table_row_offset']):
        name, value = _row_pair(row)
        try:
            count, expires = parse_quota_value(value)
        except ValueError:
            logger.debug(f"Строка '{name}' не является пакетом трафика, пропускаю")
            continue
        packets.append(TrafficPacket(name, count, expires))
    return packets


def parse_statistics_page(html: str) -> StatisticsSnapshot:
    """
    Разбирает страницу статистики

    Args:
        html: HTML страницы /ua/statistic

    Returns:
        StatisticsSnapshot с пакетами и использованным трафиком

    Raises:
        ParseError: если структура страницы не совпадает с ожидаемой
    """
    soup = BeautifulSoup(html, 'html.parser')
    tables = soup.select(PAGE_LAYOUT['statistic_table_selector'])
    expected = PAGE_LAYOUT['statistic_table_count']
    if len(tables) != expected:
        raise ParseError(
            f"Expected {expected} '{PAGE_LAYOUT['statistic_table_selector']}' tables, found {len(tables)}"
        )

    used = parse_used(tables[0])
    packets = parse_packets(tables[1])
    logger.info(f"Статистика разобрана: {len(packets)} пакетов, использовано {used} МБ")
    return StatisticsSnapshot(tuple(packets), used)


def find_speedtest_status_text(html: str) -> str:
    """
    Возвращает текст блока статуса теста скорости

    Raises:
        ParseError: если блока #before-test нет на странице
    """
    soup = BeautifulSoup(html, 'html.parser')
    element_id = PAGE_LAYOUT['speedtest_status_id']
    element = soup.find(id=element_id)
    if element is None:
        raise ParseError(f"Element #{element_id} not found on speedtest page")
    return element.get_text().strip()
