"""
Exit codes for pomo.

A normal quit exits 0 and click reports usage errors as 2 on its own; the
only code pomo raises itself is for fatal I/O errors.
"""

# Fatal error: state file could not be written, terminal mode failed
ERROR_GENERAL = 1
