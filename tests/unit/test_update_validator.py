"""
Unit tests for UpdateValidator.
"""

import pytest

from klevu.core.models import Update, UpdateOperations
from klevu.core.validators import UpdateValidator
from klevu.exceptions import (
    InvalidDataValidationException,
    InvalidTypeValidationException,
)


def validation_errors(update) -> list[str]:
    with pytest.raises(InvalidDataValidationException) as exc_info:
        UpdateValidator().execute(update)
    return exc_info.value.errors


@pytest.mark.unit
class TestUpdateValidator:
    """Tests for UpdateValidator"""

    @pytest.mark.parametrize("op", ["add", "remove", "replace"])
    def test_valid_operations(self, op):
        UpdateValidator().execute(Update(record_id="1", op=op, path="/attributes/name", value="x"))

    def test_enum_operation(self):
        """Test UpdateOperations members are accepted"""
        update = Update(record_id="1", op=UpdateOperations.REPLACE, path="/attributes/sku", value="x")
        assert update.op == "replace"
        UpdateValidator().execute(update)

    def test_alias_construction(self):
        update = Update.model_validate({"recordId": "1", "op": "remove", "path": "/display/name"})
        UpdateValidator().execute(update)

    @pytest.mark.parametrize("op", ["", "ADD", "delete", "move"])
    def test_unrecognised_operation(self, op):
        update = Update(record_id="1", op=op, path="/attributes/name")
        assert validation_errors(update) == [
            f'Unrecognised update operation [op] "{op}", must be one of add, remove, replace'
        ]

    @pytest.mark.parametrize("path", [None, ""])
    def test_missing_path(self, path):
        update = Update(record_id="1", op="remove", path=path)
        assert validation_errors(update) == ["Path must be set"]

    @pytest.mark.parametrize(
        "path",
        ["/", "/attributes/name", "/attributes/prices/0", "attributes/name", "@1425", "/foo~1bar", "name"],
    )
    def test_valid_paths(self, path):
        UpdateValidator().execute(Update(record_id="1", op="remove", path=path))

    @pytest.mark.parametrize("path", ["#1234", "/foo\\/bar", " ", "/attributes/first name"])
    def test_invalid_paths(self, path):
        update = Update(record_id="1", op="remove", path=path)
        assert validation_errors(update) == [f'Path "{path}" is not a valid JSON Pointer value']

    def test_errors_accumulate_in_order(self):
        """Test id, operation and path errors are all reported"""
        update = Update(record_id="", op="foo", path=None)
        assert validation_errors(update) == [
            "Record Id is required",
            'Unrecognised update operation [op] "foo", must be one of add, remove, replace',
            "Path must be set",
        ]

    def test_non_update(self):
        with pytest.raises(InvalidTypeValidationException) as exc_info:
            UpdateValidator().execute({"recordId": "1"})

        assert exc_info.value.errors == ["Update must be instance of Update, received dict"]

    def test_get_operation(self):
        assert Update(op="add").get_operation() is UpdateOperations.ADD
        assert Update(op="copy").get_operation() is None
