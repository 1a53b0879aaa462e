"""Tests invitation iCalendar du bloc Calendar."""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timedelta, timezone
from urllib.parse import unquote

from email_builder.blocks import CalendarBlock
from email_builder.calendar_invite import (
    calendar_data_uri, escape_text, format_utc, generate_calendar_invite,
)


def _block(**kw):
    kw.setdefault("created_at", datetime(2023, 12, 1, 8, 0))
    return CalendarBlock(id="cal_1", start=datetime(2024, 1, 1, 10, 0), **kw)


def test_dates_are_utc_basic_format():
    ics = generate_calendar_invite(_block(end=datetime(2024, 1, 1, 11, 0)))
    assert "DTSTART:20240101T100000Z" in ics
    assert "DTEND:20240101T110000Z" in ics
    assert "DTSTAMP:20231201T080000Z" in ics


def test_structure_and_uid():
    lines = generate_calendar_invite(_block()).split("\r\n")
    assert lines[0] == "BEGIN:VCALENDAR"
    assert "VERSION:2.0" in lines
    assert "BEGIN:VEVENT" in lines and "END:VEVENT" in lines
    assert "UID:cal_1@email-builder" in lines
    assert lines[-2] == "END:VCALENDAR"
    assert lines[-1] == ""


def test_crlf_line_endings():
    ics = generate_calendar_invite(_block())
    assert "\n" not in ics.replace("\r\n", "")


def test_text_fields_escaped():
    ics = generate_calendar_invite(_block(
        event_title="Réunion; équipe, produit",
        event_description="Ligne 1\nLigne 2 \\ fin",
        event_location="Paris, France",
    ))
    assert "SUMMARY:Réunion\\; équipe\\, produit" in ics
    assert "DESCRIPTION:Ligne 1\\nLigne 2 \\\\ fin" in ics
    assert "LOCATION:Paris\\, France" in ics


def test_empty_optional_fields_omitted():
    ics = generate_calendar_invite(_block())
    assert "DESCRIPTION:" not in ics
    assert "LOCATION:" not in ics


def test_aware_datetime_converted_to_utc():
    paris = timezone(timedelta(hours=2))
    assert format_utc(datetime(2024, 6, 1, 12, 0, tzinfo=paris)) == "20240601T100000Z"


def test_escape_text_plain_unchanged():
    assert escape_text("Simple") == "Simple"


def test_output_is_deterministic():
    b = _block()
    assert generate_calendar_invite(b) == generate_calendar_invite(b)


def test_data_uri_round_trip():
    b = _block()
    uri = calendar_data_uri(b)
    assert uri.startswith("data:text/calendar;charset=utf-8,")
    assert unquote(uri.split(",", 1)[1]) == generate_calendar_invite(b)
