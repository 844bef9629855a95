import unittest
from http import HTTPStatus
from typing import Protocol

from endpoint import RATE_LIMITED

from pyapidoc.decorators import api_responses, webmethod
from pyapidoc.metadata import WebMethod
from pyapidoc.responses import ApiResponses, ResponseDescriptor


class TestDecorators(unittest.TestCase):
    def test_webmethod(self) -> None:
        @webmethod(route="/items/{id}", public=True, deprecated=True, response_example={"id": "1"})
        def get_item(id: str) -> dict[str, str]: ...

        metadata: WebMethod = get_item.__webmethod__  # type: ignore[attr-defined]
        self.assertEqual(metadata.route, "/items/{id}")
        self.assertTrue(metadata.public)
        self.assertTrue(metadata.deprecated)
        self.assertEqual(metadata.response_examples, [{"id": "1"}])
        self.assertIsNone(metadata.request_examples)
        self.assertIsNone(metadata.responses)

    def test_webmethod_exclusive_examples(self) -> None:
        with self.assertRaises(ValueError):
            webmethod(request_example=1, request_examples=[1, 2])
        with self.assertRaises(ValueError):
            webmethod(response_example=1, response_examples=[1, 2])

    def test_webmethod_falsy_example(self) -> None:
        @webmethod(request_example="", response_example=0)
        def set_count(value: int) -> int: ...

        metadata: WebMethod = set_count.__webmethod__  # type: ignore[attr-defined]
        self.assertEqual(metadata.request_examples, [""])
        self.assertEqual(metadata.response_examples, [0])

    def test_webmethod_responses(self) -> None:
        @webmethod(responses=[RATE_LIMITED])
        def get_item(id: str) -> str: ...

        metadata: WebMethod = get_item.__webmethod__  # type: ignore[attr-defined]
        self.assertEqual(metadata.responses, [RATE_LIMITED])

    def test_webmethod_duplicate_responses(self) -> None:
        other = ResponseDescriptor(status_code=HTTPStatus.TOO_MANY_REQUESTS, description="Slow down.")
        with self.assertRaises(ValueError):
            webmethod(responses=[RATE_LIMITED, other])

    def test_api_responses_on_class(self) -> None:
        @api_responses()
        class Endpoint(Protocol):
            def get_item(self, id: str) -> str: ...

        self.assertEqual(Endpoint.__api_responses__, ApiResponses())  # type: ignore[attr-defined]

    def test_api_responses_on_function(self) -> None:
        def get_item(id: str) -> str: ...

        decorated = api_responses(media_type="text/csv")(get_item)
        self.assertIs(decorated, get_item)
        self.assertEqual(get_item.__api_responses__, ApiResponses(media_type="text/csv"))  # type: ignore[attr-defined]

    def test_api_responses_invalid_target(self) -> None:
        with self.assertRaises(TypeError):
            api_responses()(42)
        with self.assertRaises(TypeError):
            api_responses()(len)

    def test_api_responses_invalid_media_type(self) -> None:
        with self.assertRaises(ValueError):
            api_responses(media_type="")


if __name__ == "__main__":
    unittest.main()
