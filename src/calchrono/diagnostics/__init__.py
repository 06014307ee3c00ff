"""Diagnostics package.

- pretty_month, new_years_table, round_trip: always available, text output
- month_lengths: optional (requires the diagnostics extras: numpy + matplotlib)
"""

__all__ = ["pretty_month", "new_years_table", "round_trip", "month_lengths"]
