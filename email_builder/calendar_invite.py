"""
Invitation iCalendar (RFC 5545) pour le bloc Calendar.

  - UID dérivé de l'id du bloc
  - DTSTAMP / DTSTART / DTEND en UTC : 2024-01-01T10:00 → 20240101T100000Z
  - SUMMARY / DESCRIPTION / LOCATION échappés (\\ ; , retour ligne)
"""
from datetime import datetime, timezone
from urllib.parse import quote

from .blocks import CalendarBlock

PRODID = "-//email_builder//Calendar Invite//EN"


def format_utc(value: datetime) -> str:
    """Date ISO 8601 sans ponctuation, suffixe Z. Date naïve = déjà UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y%m%dT%H%M%SZ")


def escape_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
             .replace(";", "\\;")
             .replace(",", "\\,")
             .replace("\r\n", "\\n")
             .replace("\n", "\\n")
    )


def generate_calendar_invite(block: CalendarBlock) -> str:
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "BEGIN:VEVENT",
        f"UID:{block.id}@email-builder",
        f"DTSTAMP:{format_utc(block.created_at)}",
        f"DTSTART:{format_utc(block.start)}",
        f"DTEND:{format_utc(block.end)}",
        f"SUMMARY:{escape_text(block.event_title)}",
    ]
    if block.event_description:
        lines.append(f"DESCRIPTION:{escape_text(block.event_description)}")
    if block.event_location:
        lines.append(f"LOCATION:{escape_text(block.event_location)}")
    lines += ["END:VEVENT", "END:VCALENDAR"]
    return "\r\n".join(lines) + "\r\n"


def calendar_data_uri(block: CalendarBlock) -> str:
    """Lien du bouton : l'invitation encodée dans une data: URI."""
    return "data:text/calendar;charset=utf-8," + quote(generate_calendar_invite(block), safe="")
