"""Пути портала ASSA (относительно portal.host)."""

PATH_LOGIN = '/ua/login'
PATH_STATISTIC = '/ua/statistic'
PATH_SPEEDTEST = '/ua/speedtest'
PATH_SPEEDTEST_FRAME = '/speedtest/index.php?lang=ua'
PATH_SPEEDTEST_REPORT = '/speedtest/speedtest_report.php'
PATH_SPEEDTEST_UPLOAD = '/speedtest/speedtest/upload.php'
PATH_SPEEDTEST_APPLET = '/speedtest/netgauge.swf?v=3.0&lang=ua'
