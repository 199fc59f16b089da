"""Core Layer — pure temporal decomposition, no IO, no async, no global clock.

Invariants:
    - No module in core/ imports from services/, infrastructure/, or config
    - "now" is always an explicit parameter; the host clock is never read here
    - Calendar rules arrive through CalendarLike, never from an ambient locale

Design Decisions:
    - Functional core separated from imperative shell (engines are pure given a calendar)
"""
