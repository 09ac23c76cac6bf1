"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

AT_RISK_THRESHOLD = 3
CRITICAL_THRESHOLD = 5
DEFAULT_AUDIT_LIMIT = 50
DEFAULT_REPORT_DAYS = 7
