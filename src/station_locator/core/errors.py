from __future__ import annotations


class StationLocatorError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class FetchFailed(StationLocatorError):
    default_message = "Failed to load stations"


class InvalidRecord(StationLocatorError):
    default_message = "invalid station record"


class InvalidCoordinate(InvalidRecord):
    default_message = "invalid lat/lng"


class WriteFailed(StationLocatorError):
    default_message = "failed to write station"

    def __init__(self, station_code: str, message: str | None = None) -> None:
        self.station_code = station_code
        super().__init__(message)


class MissingParameter(StationLocatorError):
    status_code = 400
    default_message = "lat,lng required"


class InvalidParameter(StationLocatorError):
    status_code = 400
    default_message = "lat,lng must be valid coordinates"


class Unauthorized(StationLocatorError):
    status_code = 401
    default_message = "Unauthorized"


class InternalError(StationLocatorError):
    pass
