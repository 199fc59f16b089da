"""Services Layer — wires clock, calendar and engines into periodic callbacks.

Invariants:
    - Only services read the host clock (through ClockLike)
    - The countdown counter is mutated only by the 1 Hz callback
"""
