"""Tests for the first-field validation message."""

import unittest

from fastapi.exceptions import RequestValidationError

from api.errors import first_validation_message


class TestFirstValidationMessage(unittest.TestCase):

    def test_names_first_field(self):
        exc = RequestValidationError([
            {"type": "missing", "loc": ("body", "name"), "msg": "Field required"},
            {"type": "missing", "loc": ("body", "date"), "msg": "Field required"},
        ])
        self.assertEqual(first_validation_message(exc), "name: Field required")

    def test_strips_value_error_prefix(self):
        exc = RequestValidationError([
            {"type": "value_error", "loc": ("body", "username"), "msg": "Value error, must not be empty"},
        ])
        self.assertEqual(first_validation_message(exc), "username: must not be empty")

    def test_malformed_json(self):
        exc = RequestValidationError([
            {"type": "json_invalid", "loc": ("body", 30), "msg": "JSON decode error"},
        ])
        self.assertEqual(first_validation_message(exc), "body: Invalid JSON")

    def test_offset_after_body_is_not_a_field(self):
        exc = RequestValidationError([
            {"type": "model_attributes_type", "loc": ("body", 0), "msg": "Input should be a valid dictionary"},
        ])
        self.assertEqual(first_validation_message(exc), "body: Input should be a valid dictionary")

    def test_nested_field_path(self):
        exc = RequestValidationError([
            {"type": "missing", "loc": ("body", "items", 2, "name"), "msg": "Field required"},
        ])
        self.assertEqual(first_validation_message(exc), "items.2.name: Field required")

    def test_no_errors(self):
        self.assertEqual(first_validation_message(RequestValidationError([])), "Invalid request")


if __name__ == '__main__':
    unittest.main()
