"""Define constants relating to named coordinate frames."""

DEFAULT_FRAME = "world"
"""Reference frame assumed for poses that do not name one."""
