import pytest
import requests

from assa_client.errors import NetworkError
from assa_client.transport import PortalTransport

from .fixtures.pages import HOST, STATISTIC_URL


def test_resolve_relative_and_absolute(transport):
    assert transport.resolve("/ua/statistic") == STATISTIC_URL
    assert transport.resolve("https://freegeoip.net/json/") == "https://freegeoip.net/json/"


def test_user_agent_set_on_session():
    session = requests.Session()
    PortalTransport(host=HOST, user_agent="TestAgent/1.0", session=session)
    assert session.headers["User-Agent"] == "TestAgent/1.0"


def test_default_user_agent_is_desktop_browser():
    session = requests.Session()
    PortalTransport(host=HOST, session=session)
    assert session.headers["User-Agent"].startswith("Mozilla/5.0 (X11; Linux x86_64)")


def test_post_by_default_with_form_and_redirects(fake_session, transport):
    fake_session.add("POST", STATISTIC_URL, text="ok")

    response = transport.request("/ua/statistic", {"a": 1})

    assert response.text == "ok"
    call = fake_session.calls[0]
    assert call["method"] == "POST"
    assert call["data"] == {"a": 1}
    assert call["allow_redirects"] is True
    assert call["timeout"] == 5


def test_connection_error_is_wrapped(fake_session, transport):
    with pytest.raises(NetworkError) as excinfo:
        transport.get("/missing")
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_http_error_status_is_wrapped(fake_session, transport):
    fake_session.add("GET", HOST + "/broken", status_code=500)
    with pytest.raises(NetworkError):
        transport.get("/broken")


def test_context_manager_closes_session(fake_session):
    with PortalTransport(host=HOST, session=fake_session):
        pass
    assert fake_session.closed is True
