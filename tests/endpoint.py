import enum
import uuid
from dataclasses import dataclass
from http import HTTPStatus
from typing import Optional, Protocol

from strong_typing.schema import json_schema_type

from pyapidoc.decorators import api_responses, webmethod
from pyapidoc.responses import ResponseDescriptor


@json_schema_type
@dataclass
class NotFoundError(Exception):
    """
    Raised when an entity does not exist or has expired.

    :param id: The identifier of the entity not found, e.g. the UUID of a user.
    :param kind: The entity that is not found such as a user or a group.
    """

    id: str
    kind: str


@json_schema_type
@dataclass
class ValidationError(Exception):
    """
    Raised when a field of the request payload has an invalid value.

    :param field: Name of the field that failed validation.
    :param reason: Human-readable explanation of the failure.
    """

    field: str
    reason: str


class Role(enum.Enum):
    "Access level of a user."

    Reader = "reader"
    Writer = "writer"
    Admin = "admin"


@json_schema_type
@dataclass
class User:
    """
    A registered user of the application.

    :param id: Uniquely identifies the user.
    :param email: The e-mail address of the user.
    :param role: Access level of the user.
    """

    id: uuid.UUID
    email: str
    role: Role


@json_schema_type
@dataclass
class UserRegistration:
    """
    Data required to register a new user.

    :param email: The e-mail address of the user.
    :param role: Access level requested for the user.
    """

    email: str
    role: Role


RATE_LIMITED = ResponseDescriptor(
    status_code=HTTPStatus.TOO_MANY_REQUESTS,
    description="Too many requests. Retry after the period given in the `Retry-After` header.",
)

CUSTOM_BAD_REQUEST = ResponseDescriptor(
    status_code=HTTPStatus.BAD_REQUEST,
    description="The import file is malformed.",
    media_type="text/plain",
)


@api_responses()
class UserEndpoint(Protocol):
    """
    Users

    Operations to register, look up and remove users.
    """

    def get_user(self, id: uuid.UUID, /) -> User:
        """
        Looks up a user by identifier.

        :param id: Uniquely identifies the user.
        :returns: The user with the given identifier.
        :raises NotFoundError: No user with the given identifier exists.
        """
        ...

    @webmethod(route="/users", public=True)
    def get_users(self, role: Optional[Role] = None) -> list[User]:
        """
        Lists users.

        :param role: Only list users with this access level.
        """
        ...

    @api_responses(media_type="application/xml")
    @webmethod(route="/users/{id}/export")
    def get_export(self, id: uuid.UUID) -> User:
        "Exports a user as an XML document."
        ...

    @webmethod(route="/users")
    def create_user(self, registration: UserRegistration) -> User:
        """
        Registers a new user.

        :param registration: Information about the user to register.
        :raises ValidationError: A field in the registration data is invalid.
        """
        ...

    @webmethod(route="/users/{id}", deprecated=True)
    def delete_user(self, id: uuid.UUID) -> None:
        "Removes a user."
        ...

    @webmethod(route="/users/import", responses=[CUSTOM_BAD_REQUEST, RATE_LIMITED])
    def do_import(self, content: str) -> None:
        "Imports users from a file."
        ...


class StatusEndpoint(Protocol):
    "Health check operations."

    @webmethod(route="/status", public=True)
    def get_status(self) -> str:
        """
        Reports whether the service is running.

        :returns: A short status message.
        """
        ...
