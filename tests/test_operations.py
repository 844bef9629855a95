import unittest
import uuid
from typing import Optional, Protocol

from endpoint import Role, User, UserEndpoint, UserRegistration

from pyapidoc.decorators import webmethod
from pyapidoc.operations import EndpointOperation, HTTPMethod, ValidationError, get_endpoint_operations
from pyapidoc.responses import ApiResponses


class TestOperations(unittest.TestCase):
    operations: dict[str, EndpointOperation]

    def setUp(self) -> None:
        super().setUp()
        self.operations = {op.func_name: op for op in get_endpoint_operations(UserEndpoint)}

    def test_discovery(self) -> None:
        self.assertEqual(
            list(self.operations.keys()),
            ["create_user", "delete_user", "do_import", "get_export", "get_user", "get_users"],
        )

    def test_http_method(self) -> None:
        self.assertIs(self.operations["create_user"].http_method, HTTPMethod.POST)
        self.assertIs(self.operations["delete_user"].http_method, HTTPMethod.DELETE)
        self.assertIs(self.operations["do_import"].http_method, HTTPMethod.POST)
        self.assertIs(self.operations["get_user"].http_method, HTTPMethod.GET)

    def test_positional_path_parameter(self) -> None:
        op = self.operations["get_user"]
        self.assertEqual(op.path_params, [("id", uuid.UUID)])
        self.assertEqual(op.query_params, [])
        self.assertEqual(op.get_route(), "/user/{id}")
        self.assertIs(op.response_type, User)

    def test_route_parameter(self) -> None:
        op = self.operations["get_export"]
        self.assertEqual(op.path_params, [("id", uuid.UUID)])
        self.assertEqual(op.get_route(), "/users/{id}/export")

    def test_query_parameter(self) -> None:
        op = self.operations["get_users"]
        self.assertEqual(op.query_params, [("role", Optional[Role])])
        self.assertIsNone(op.request_param)
        self.assertTrue(op.public)

    def test_request_body(self) -> None:
        op = self.operations["create_user"]
        self.assertEqual(op.request_param, ("registration", UserRegistration))
        self.assertEqual(op.query_params, [])

    def test_no_payload(self) -> None:
        op = self.operations["delete_user"]
        self.assertIsNone(op.response_type)
        self.assertTrue(op.deprecated)

    def test_api_responses_precedence(self) -> None:
        self.assertEqual(self.operations["get_user"].api_responses, ApiResponses())
        self.assertEqual(self.operations["get_export"].api_responses, ApiResponses(media_type="application/xml"))

    def test_declared_responses(self) -> None:
        declared = self.operations["do_import"].declared_responses
        self.assertIsNotNone(declared)
        self.assertEqual([int(d.status_code) for d in declared or []], [400, 429])

    def test_not_a_class(self) -> None:
        with self.assertRaises(ValidationError):
            get_endpoint_operations(42)  # type: ignore[arg-type]

    def test_missing_annotation(self) -> None:
        class Endpoint(Protocol):
            def get_item(self, id) -> str: ...  # type: ignore[no-untyped-def]

        with self.assertRaises(ValidationError):
            get_endpoint_operations(Endpoint)

    def test_unknown_route_parameter(self) -> None:
        class Endpoint(Protocol):
            @webmethod(route="/items/{key}")
            def get_item(self, id: str) -> str: ...

        with self.assertRaises(ValidationError):
            get_endpoint_operations(Endpoint)

    def test_no_operations(self) -> None:
        class Endpoint(Protocol):
            def helper(self) -> None: ...

        with self.assertRaises(ValidationError):
            get_endpoint_operations(Endpoint)


if __name__ == "__main__":
    unittest.main()
