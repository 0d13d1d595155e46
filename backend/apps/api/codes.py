class ErrorCode:
    """Application error codes forwarded to the exception handler."""

    ROUTING_ERROR = "ROUTING_ERROR"
    INVALID_TYPES_ERROR = "INVALID_TYPES_ERROR"
    INVALID_IDS_ERROR = "INVALID_IDS_ERROR"
    UNAUTHORIZED_ERROR = "UNAUTHORIZED_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
