"""
Clash detection.

Given the stored events, detect pairs of events that overlap in time.
Overlap rule:
    start < other_end AND end > other_start

Deadlines (events without an end) have no duration and never clash.
"""

from __future__ import annotations

from interntrack.model import Event


def find_clashes(events: list[Event]) -> list[tuple[Event, Event]]:
    """
    Find overlapping event pairs (A,B), each pair appears once (i<j).
    Pairs are ordered by the start of their first event.
    """
    clashes: list[tuple[Event, Event]] = []

    ordered = sorted((ev for ev in events if not ev.is_deadline), key=lambda ev: ev.start)

    # O(n^2) is fine for the size of a personal catalogue
    for i in range(len(ordered)):
        ev1 = ordered[i]
        for j in range(i + 1, len(ordered)):
            ev2 = ordered[j]
            if ev2.start >= ev1.effective_end:
                # sorted by start: no later event can overlap ev1
                break
            if ev1.overlaps(ev2):
                clashes.append((ev1, ev2))

    return clashes
