from datetime import datetime, timedelta, timezone

import pytest

from narr.dates import ZERO_TIME, parse_date


def test_rfc3339_utc():
    assert parse_date("2003-12-13T18:30:02Z") == datetime.fromtimestamp(1071340202, timezone.utc)


def test_no_zone_is_utc():
    have = parse_date("2003-12-13T09:17:51")
    assert have == datetime(2003, 12, 13, 9, 17, 51, tzinfo=timezone.utc)


def test_offset_equivalence():
    assert parse_date("2006-01-02T15:04:05-07:00") == parse_date("Mon, 02 Jan 2006 15:04:05 -0700")


@pytest.mark.parametrize("line", ["", "not a date", "2006-13-45"])
def test_unparsable_gives_zero(line):
    assert parse_date(line) == ZERO_TIME


@pytest.mark.parametrize(
    "fmt",
    [
        "%a, %d %b %Y %H:%M:%S +0000",
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%d %H:%M:%S",
        "%A, %B %d, %Y %H:%M:%S UTC",
    ],
)
def test_round_trip(fmt):
    moment = datetime(2021, 7, 4, 13, 5, 9, tzinfo=timezone.utc)
    assert parse_date(moment.strftime(fmt)) == moment


def test_round_trip_offset():
    moment = datetime(2019, 3, 1, 8, 0, 0, tzinfo=timezone(timedelta(hours=3)))
    have = parse_date(moment.strftime("%a, %d %b %Y %H:%M:%S %z"))
    assert have == moment
    assert have.utcoffset() == moment.utcoffset()


def test_twelve_hour_round_trip():
    moment = datetime(2020, 2, 29, 15, 30, tzinfo=timezone.utc)
    assert parse_date(moment.strftime("%B %d, %Y %I:%M %p")) == moment