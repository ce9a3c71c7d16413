import sys
from pathlib import Path

import pytest

# Добавляем путь к src для доступа к модулям без установки пакета
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from assa_client.models import Credential  # noqa: E402
from assa_client.transport import PortalTransport  # noqa: E402

from .fixtures.pages import HOST, LOGIN_URL, STATISTIC_URL, statistic_page  # noqa: E402
from .utils.fake_portal import FakePortalSession  # noqa: E402


@pytest.fixture
def credential() -> Credential:
    return Credential("0941234567", "secret")


@pytest.fixture
def fake_session() -> FakePortalSession:
    """Пустой мок сессии: маршруты добавляются в тестах."""
    return FakePortalSession()


@pytest.fixture
def transport(fake_session) -> PortalTransport:
    return PortalTransport(host=HOST, user_agent="TestAgent/1.0", timeout=5, session=fake_session)


@pytest.fixture
def logged_in_portal(fake_session) -> FakePortalSession:
    """Портал, на котором вход успешен: редирект на страницу статистики."""
    fake_session.add("POST", LOGIN_URL, text=statistic_page(), final_url=STATISTIC_URL)
    fake_session.add("POST", STATISTIC_URL, text=statistic_page())
    return fake_session
