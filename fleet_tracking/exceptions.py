"""
Error types raised by the trip event core
"""


class FleetTrackingError(Exception):
    """Base class for errors raised by fleet_tracking"""


class DirectoryNotFound(FleetTrackingError):
    """The trips data directory does not exist"""

    def __init__(self, path: str):
        super().__init__(f"Trips data directory not found: {path}")
        self.path = path


class MalformedBatch(FleetTrackingError):
    """A trip file could not be read, parsed or validated, or holds no events"""

    def __init__(self, filename: str, reason: str):
        super().__init__(f"Malformed trip file {filename}: {reason}")
        self.filename = filename
        self.reason = reason
