"""Constants shared across the test suite."""

from datetime import UTC, datetime

# Sunday afternoon; its ISO week starts on Monday 2026-02-09
FIXED_NOW = datetime(2026, 2, 15, 13, 30, tzinfo=UTC)
