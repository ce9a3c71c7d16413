from assa_client.classifiers import login_succeeded, speedtest_completed

from .fixtures.pages import LOGIN_URL, STATISTIC_URL


def test_login_succeeded_only_on_statistic_url():
    assert login_succeeded(STATISTIC_URL, STATISTIC_URL) is True
    assert login_succeeded(LOGIN_URL, STATISTIC_URL) is False
    assert login_succeeded(STATISTIC_URL + "?error=1", STATISTIC_URL) is False
    assert login_succeeded(None, STATISTIC_URL) is False
    assert login_succeeded("", STATISTIC_URL) is False


def test_speedtest_completed_by_greeting_prefix():
    assert speedtest_completed("  Дякуємо вам за участь  ") is True
    assert speedtest_completed("Розпочати тест") is False
    assert speedtest_completed("") is False
    assert speedtest_completed(None) is False
