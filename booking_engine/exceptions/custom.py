class BookingError(Exception):
    code = "booking_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BookingValidationError(BookingError):
    """Local input or admissibility failure. Never reaches the network."""

    code = "validation_error"


class DateRangeError(BookingValidationError):
    code = "date_range_invalid"


class InvalidDateRangeError(DateRangeError):
    code = "invalid_date_range"


class PastDateError(DateRangeError):
    code = "past_date"


class InvalidPointsError(BookingValidationError):
    code = "invalid_points"


class InsufficientPointsError(BookingValidationError):
    code = "insufficient_points"

    def __init__(self, requested: int, balance: int):
        self.requested = requested
        self.balance = balance
        super().__init__(
            f"Insufficient points. Available: {balance}, Requested: {requested}"
        )


class CapacityExceededError(BookingValidationError):
    code = "capacity_exceeded"

    def __init__(self, message: str, capacity: int):
        self.capacity = capacity
        super().__init__(message)


class RoomOutOfServiceError(BookingValidationError):
    code = "room_out_of_service"


class RoomUnavailableError(BookingValidationError):
    code = "room_unavailable"


class HotelApiError(BookingError):
    code = "backend_error"

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class NetworkError(HotelApiError):
    code = "network_error"

    def __init__(self, message: str = "Network error occurred"):
        super().__init__(message, status_code=None)


class MalformedResponseError(HotelApiError):
    code = "malformed_response"


class SubmissionError(BookingError):
    code = "submission_error"

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class SubmissionNetworkError(SubmissionError):
    code = "network_error"


class InvalidTransitionError(Exception):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move booking attempt from {current} to {target}")
