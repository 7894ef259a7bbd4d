#!/usr/bin/env python3
"""Timing constants for the reconciliation loop."""

# Period between reconciliation ticks in seconds.
TICK_INTERVAL: float = 0.5

# Minimum time after an accepted update before another update in either
# direction may be accepted, in seconds.
QUIESCENCE_WINDOW: float = 1.0
