"""Utility functions for endpoint handlers."""

from fastapi import HTTPException, status

from errors import DimensionMismatchError, UpstreamUnavailableError


def bad_request(cause: str) -> HTTPException:
    """
    Build the error returned for an invalid client request.

    Returns:
        HTTPException: HTTP 400 Bad Request with the given cause.
    """
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "response": "Invalid request",
            "cause": cause,
        },
    )


def upstream_error_to_http(error: UpstreamUnavailableError) -> HTTPException:
    """
    Translate a failure of an external service to an HTTP error.

    A vector size mismatch means the deployment is misconfigured and maps to
    HTTP 500; any other upstream failure is transient and maps to HTTP 503.
    The cause names the failing service but not its raw error text.
    """
    if isinstance(error, DimensionMismatchError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "response": "Vector index is misconfigured",
                "cause": (
                    f"Embedding dimension {error.actual} does not match "
                    f"index dimension {error.expected}"
                ),
            },
        )
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={
            "response": "Unable to answer the question",
            "cause": f"{error.service} service is not available",
        },
    )
