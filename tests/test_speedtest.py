import random

import pytest

from assa_client.errors import ParseError
from assa_client.session import SessionManager
from assa_client.speedtest import REPORT_HASH, SpeedTestProtocol, SpeedTestReport

from .fixtures.pages import (
    GEOIP_URL,
    HOST,
    SPEEDTEST_DONE,
    SPEEDTEST_FRAME_URL,
    SPEEDTEST_NOT_DONE,
    SPEEDTEST_REPORT_URL,
    SPEEDTEST_URL,
)


def _protocol(credential, transport, seed=42):
    return SpeedTestProtocol(SessionManager(credential, transport), random.Random(seed))


def _speedtest_portal(portal, *frames):
    portal.add("GET", SPEEDTEST_URL, text="<html>landing</html>")
    for frame in frames:
        portal.add("GET", SPEEDTEST_FRAME_URL, text=frame)
    portal.add("GET", GEOIP_URL, text='callback({"ip":"203.0.113.5"})')
    portal.add("POST", SPEEDTEST_REPORT_URL, text="OK")
    return portal


def test_is_speed_test_done_true_and_false(credential, logged_in_portal, transport):
    _speedtest_portal(logged_in_portal, SPEEDTEST_DONE, SPEEDTEST_NOT_DONE)
    protocol = _protocol(credential, transport)

    assert protocol.is_speed_test_done() is True
    assert protocol.is_speed_test_done() is False
    # Лендинг запрашивается перед каждой проверкой
    assert len(logged_in_portal.calls_to(SPEEDTEST_URL, "GET")) == 2


def test_is_speed_test_done_without_status_element(credential, logged_in_portal, transport):
    _speedtest_portal(logged_in_portal, "<html><body>maintenance</body></html>")
    with pytest.raises(ParseError):
        _protocol(credential, transport).is_speed_test_done()


def test_report_skipped_when_already_done(credential, logged_in_portal, transport):
    _speedtest_portal(logged_in_portal, SPEEDTEST_DONE)

    assert _protocol(credential, transport).report_speed_test() is False
    assert logged_in_portal.calls_to(SPEEDTEST_REPORT_URL) == []
    assert logged_in_portal.calls_to(GEOIP_URL) == []


def test_report_submits_fabricated_payload(credential, logged_in_portal, transport):
    _speedtest_portal(logged_in_portal, SPEEDTEST_NOT_DONE)

    assert _protocol(credential, transport).report_speed_test() is True

    reports = logged_in_portal.calls_to(SPEEDTEST_REPORT_URL, "POST")
    assert len(reports) == 1
    form = reports[0]["data"]
    assert form["clientip"] == "203.0.113.5"
    assert form["hash"] == REPORT_HASH
    assert form["methodid"] == 1
    assert form["serverport"] == 443
    assert form["serverid"] == 1
    assert form["customer"] == "intertel"
    assert form["testmethod"] == "http"
    assert form["serverurl"] == HOST + "/speedtest/speedtest/upload.php"
    assert form["testurl"] == HOST + "/speedtest/netgauge.swf?v=3.0&lang=ua"
    for key in ("download", "upload", "latency"):
        assert 95 <= form[key] < 295


def test_second_report_is_skipped_after_server_shows_completion(credential, logged_in_portal, transport):
    _speedtest_portal(logged_in_portal, SPEEDTEST_NOT_DONE, SPEEDTEST_DONE)
    protocol = _protocol(credential, transport)

    assert protocol.report_speed_test() is True
    assert protocol.report_speed_test() is False
    assert len(logged_in_portal.calls_to(SPEEDTEST_REPORT_URL)) == 1


def test_seeded_report_is_reproducible():
    first = SpeedTestReport.generate(random.Random(7))
    second = SpeedTestReport.generate(random.Random(7))
    assert first == second


def test_report_values_stay_in_range():
    rng = random.Random(0)
    for _ in range(200):
        report = SpeedTestReport.generate(rng)
        for value in (report.download, report.upload, report.latency):
            assert 95 <= value < 295
