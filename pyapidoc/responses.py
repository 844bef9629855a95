"""
Generate OpenAPI documentation with standard responses from a Python class definition

Copyright 2022-2025, Levente Hunyadi
"""

import dataclasses
import datetime
import json
from dataclasses import dataclass
from http import HTTPStatus

from strong_typing.core import JsonType
from strong_typing.schema import json_schema_type


@json_schema_type
@dataclass
class ErrorResponse:
    """
    Standard error response structure.

    :param errorCode: A machine-processable error identifier such as `INVALID_REQUEST`.
    :param message: A human-readable description of the error.
    :param details: Additional information about the error, e.g. the list of fields that failed validation.
    :param timestamp: The time (in UTC) when the error occurred.
    """

    errorCode: str
    message: str
    timestamp: datetime.datetime
    details: list[str] | None = None


@dataclass(frozen=True)
class ResponseDescriptor:
    """
    Describes a single documented response of an endpoint operation.

    :param status_code: HTTP status code the response is associated with.
    :param description: Human-readable text that explains when the response is returned.
    :param media_type: Content type the response body is declared with.
    :param payload_type: Type whose JSON schema documents the response body, or `None` for a generic object.
    :param example: A sample response body, serialized as JSON text.
    """

    status_code: HTTPStatus
    description: str
    media_type: str = "application/json"
    payload_type: type | None = None
    example: str | None = None

    def __post_init__(self) -> None:
        if not self.description:
            raise ValueError(f"missing description for HTTP status {self.status_code}")

    def get_example(self) -> JsonType:
        "Parses the serialized example into a JSON object (if any)."

        if self.example is None:
            return None
        return json.loads(self.example)


SUCCESS = ResponseDescriptor(
    status_code=HTTPStatus.OK,
    description="Request processed successfully.",
)

BAD_REQUEST = ResponseDescriptor(
    status_code=HTTPStatus.BAD_REQUEST,
    description=(
        "Invalid request. This could be due to missing or invalid parameters, "
        "malformed request syntax, or invalid field values."
    ),
    payload_type=ErrorResponse,
    example="""
        {
            "errorCode": "INVALID_REQUEST",
            "message": "Invalid request parameters",
            "details": ["Field 'email' must be a valid email address"],
            "timestamp": "2024-01-09T10:15:30.123Z"
        }
        """,
)

UNAUTHORIZED = ResponseDescriptor(
    status_code=HTTPStatus.UNAUTHORIZED,
    description=(
        "Authentication required. The request lacks valid authentication credentials "
        "or the provided credentials are invalid."
    ),
    payload_type=ErrorResponse,
    example="""
        {
            "errorCode": "UNAUTHORIZED",
            "message": "Authentication required",
            "timestamp": "2024-01-09T10:15:30.123Z"
        }
        """,
)

FORBIDDEN = ResponseDescriptor(
    status_code=HTTPStatus.FORBIDDEN,
    description=(
        "Permission denied. The authenticated user lacks sufficient permissions "
        "to access the requested resource."
    ),
    payload_type=ErrorResponse,
    example="""
        {
            "errorCode": "FORBIDDEN",
            "message": "Insufficient permissions",
            "timestamp": "2024-01-09T10:15:30.123Z"
        }
        """,
)

INTERNAL_ERROR = ResponseDescriptor(
    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
    description="Internal server error. An unexpected condition was encountered.",
    payload_type=ErrorResponse,
    example="""
        {
            "errorCode": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "timestamp": "2024-01-09T10:15:30.123Z"
        }
        """,
)

ERROR_DESCRIPTORS: tuple[ResponseDescriptor, ...] = (BAD_REQUEST, UNAUTHORIZED, FORBIDDEN, INTERNAL_ERROR)


@dataclass(frozen=True)
class ApiResponses:
    """
    Standard set of responses that every documented endpoint operation advertises.

    Attach to an endpoint class or an operation function with the decorator `api_responses`, or register as
    `Options.default_responses` to apply to all operations. Error responses are fixed; only the media type of the
    success response can be customized.

    :param media_type: Content type of the successful (200) response.
    """

    media_type: str = "application/json"

    def descriptors(self) -> tuple[ResponseDescriptor, ...]:
        "Response descriptors in the order 200, 400, 401, 403, 500."

        success = dataclasses.replace(SUCCESS, media_type=self.media_type)
        return (success,) + ERROR_DESCRIPTORS

    @property
    def success(self) -> ResponseDescriptor:
        return self.descriptors()[0]
