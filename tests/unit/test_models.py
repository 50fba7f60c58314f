"""
Unit tests for the indexing models and their factories.
"""

import pytest
from pydantic import ValidationError

from klevu.core.models import (
    AccountCredentials,
    ApiResponse,
    Attribute,
    AttributeFactory,
    DataType,
    Record,
    RecordFactory,
    Update,
    UpdateFactory,
    UpdateOperations,
)
from klevu.exceptions import CouldNotUpdateException


@pytest.mark.unit
class TestAttribute:
    """Tests for the Attribute model"""

    def test_defaults(self):
        attribute = Attribute(attribute_name="my_attribute", datatype=DataType.STRING)

        assert attribute.datatype == "STRING"
        assert attribute.searchable is True
        assert attribute.abbreviate is False
        assert attribute.immutable is False
        assert attribute.label == {}

    def test_mutable_attribute_can_change(self):
        attribute = Attribute(attribute_name="my_attribute", datatype="STRING")

        attribute.searchable = False
        attribute.add_label("Colour", "en")

        assert attribute.searchable is False
        assert attribute.label == {"en": "Colour"}

    def test_immutable_attribute_rejects_changes(self):
        attribute = Attribute(attribute_name="sku", datatype="STRING", immutable=True)

        with pytest.raises(CouldNotUpdateException) as exc_info:
            attribute.label = {"default": "SKU"}

        assert str(exc_info.value) == "Cannot update label property of immutable Attribute"

    def test_immutable_attribute_rejects_labels(self):
        attribute = Attribute(attribute_name="sku", datatype="STRING", immutable=True)

        with pytest.raises(CouldNotUpdateException):
            attribute.add_label("SKU")

    def test_immutable_flag_can_be_cleared(self):
        """Test clearing the flag makes the attribute editable again"""
        attribute = Attribute(attribute_name="sku", datatype="STRING", immutable=True)

        attribute.immutable = False
        attribute.searchable = False

        assert attribute.searchable is False

    def test_payload_uses_api_keys(self):
        attribute = Attribute(attribute_name="colour", datatype="MULTIVALUE", label={"default": "Colour"})

        assert attribute.to_payload() == {
            "attributeName": "colour",
            "datatype": "MULTIVALUE",
            "label": {"default": "Colour"},
            "searchable": True,
            "filterable": True,
            "returnable": True,
            "abbreviate": False,
            "rangeable": False,
            "immutable": False,
        }


@pytest.mark.unit
class TestRecordAndUpdate:
    """Tests for the Record and Update models"""

    def test_record_payload_drops_empty_fields(self):
        record = Record(id="1", type="KLEVU_PRODUCT", attributes={"sku": "1"}, groups={})

        assert record.to_payload() == {"id": "1", "type": "KLEVU_PRODUCT", "attributes": {"sku": "1"}}

    def test_record_empty_arrays_read_as_maps(self):
        """Test [] from a JSON encoder is accepted wherever a map is expected"""
        record = RecordFactory().create(
            {"id": "1", "type": "KLEVU_PRODUCT", "attributes": [], "groups": [], "channels": [], "display": []}
        )

        assert record.attributes == {}
        assert record.groups == {}
        assert record.channels == {}
        assert record.display == {}

    def test_record_payload_keeps_nested_data(self):
        record = Record(
            id="1",
            type="KLEVU_PRODUCT",
            relations={"categories": {"values": ["c1"]}},
            channels={"en_GB": {"attributes": {"url": "/p/1"}}},
            display={"name": "One"},
        )

        assert list(record.to_payload()) == ["id", "type", "relations", "channels", "display"]

    def test_update_defaults(self):
        update = Update()

        assert update.record_id == ""
        assert update.op == ""
        assert update.path is None

    def test_operation_requirements(self):
        assert UpdateOperations.ADD.requires_value()
        assert UpdateOperations.REPLACE.requires_value()
        assert not UpdateOperations.REMOVE.requires_value()
        assert all(operation.requires_path() for operation in UpdateOperations)


@pytest.mark.unit
class TestFactories:
    """Tests for the model factories"""

    def test_attribute_factory_string_label(self):
        attribute = AttributeFactory().create({"attributeName": "colour", "datatype": "STRING", "label": "Colour"})

        assert attribute.label == {"default": "Colour"}

    def test_attribute_factory_missing_name(self):
        with pytest.raises(ValueError):
            AttributeFactory().create({"datatype": "STRING"})

    def test_record_factory(self):
        record = RecordFactory().create({"id": "1", "type": "KLEVU_PRODUCT", "attributes": {"sku": "1"}})

        assert record == Record(id="1", type="KLEVU_PRODUCT", attributes={"sku": "1"})

    @pytest.mark.parametrize("data", ["1", ["1"], None])
    def test_record_factory_non_mapping(self, data):
        with pytest.raises(ValueError):
            RecordFactory().create(data)

    def test_record_factory_missing_type(self):
        with pytest.raises(ValidationError):
            RecordFactory().create({"id": "1"})

    @pytest.mark.parametrize("key", ["recordId", "record_id"])
    def test_update_factory_record_id_keys(self, key):
        update = UpdateFactory().create({key: "1", "op": "add", "path": "/attributes/sku", "value": "x"})

        assert update.record_id == "1"
        assert update.value == "x"

    def test_update_factory_non_mapping(self):
        with pytest.raises(ValueError):
            UpdateFactory().create("add")


@pytest.mark.unit
class TestApiResponseAndCredentials:
    """Tests for ApiResponse and AccountCredentials"""

    def test_success(self):
        response = ApiResponse(response_code=200, message="Batch accepted successfully")

        assert response.is_success()
        assert response.get_messages() == ["Batch accepted successfully"]

    def test_errors_mark_failure(self):
        response = ApiResponse(response_code=200, message="Partial", errors=["b error", "A error"])

        assert not response.is_success()
        assert response.get_messages() == ["A error", "b error", "Partial"]

    def test_response_is_frozen(self):
        response = ApiResponse(response_code=200)

        with pytest.raises(ValidationError):
            response.message = "changed"

    def test_credentials_require_both_keys(self):
        with pytest.raises(ValidationError):
            AccountCredentials(js_api_key="klevu-1")
