"""Shared pytest configuration."""

import os

# Qt widgets and timers must work on machines without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
