"""
Deterministic registration-log rules.

Output format of every event log is fixed here so the header and the data
lines of a file can never disagree.
"""

LOG_ENCODING = "utf-8"
LOG_DELIMITER = ","
LOG_QUOTECHAR = '"'
LOG_LINE_TERMINATOR = "\n"

# Identity columns: "USN/ID" plus "USN/ID 1" .. "USN/ID 4"
IDENTITY_PREFIXES = ("usn", "usnid")
IDENTITY_INDEXES = range(1, 5)

# Keys injected into every submitted record by the service layer
EVENT_NAME_KEYS = ("eventName", "Event Name")
SCREENSHOT_KEYS = ("screenshot", "Screenshot")
TIMESTAMP_KEY = "timestamp"
