"""
iCalendar (.ics) export.

We convert events into a calendar file that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar

A deadline (event without end) is exported with DTEND equal to DTSTART.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional

from interntrack.model import Event, Internship


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _dt_local(dt: datetime) -> str:
    """
    Convert a datetime to ICS local datetime string 'YYYYMMDDTHHMM00'.
    """
    return dt.strftime("%Y%m%dT%H%M00")


def export_events_to_ics(
    events: list[Event],
    out_path: str | Path,
    internships: Optional[Mapping[str, Internship]] = None,
) -> int:
    """
    Export events to an .ics file. Returns number of exported events.

    internships maps internship_id -> Internship and is used to prefix each
    summary with the company and role.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    internships = internships or {}

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//InternTrack//EN")
    lines.append("CALSCALE:GREGORIAN")

    count = 0
    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    for ev in events:
        dtstart = _dt_local(ev.start)
        dtend = _dt_local(ev.effective_end)

        owner = internships.get(ev.internship_id)
        summary = f"{owner.company} {owner.role}: {ev.name}" if owner else ev.name
        uid = f"{ev.internship_id}-{dtstart}-{count}"

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{_ics_escape(uid)}")
        lines.append(f"DTSTAMP:{dtstamp}")
        lines.append(f"DTSTART:{dtstart}")
        lines.append(f"DTEND:{dtend}")
        lines.append(f"SUMMARY:{_ics_escape(summary)}")
        if ev.description:
            lines.append(f"DESCRIPTION:{_ics_escape(ev.description)}")
        lines.append("END:VEVENT")
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
