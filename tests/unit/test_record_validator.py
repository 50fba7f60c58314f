"""
Unit tests for RecordValidator and the record field validators.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from klevu.core.models import Record
from klevu.core.validators import (
    BaseValidator,
    ChannelsValidator,
    GroupsValidator,
    IdValidator,
    RecordValidator,
)
from klevu.exceptions import (
    InvalidDataValidationException,
    InvalidTypeValidationException,
)

ATTRIBUTE_NAME_ERROR = (
    "Attribute Name must be alphanumeric, can include underscores (_) "
    "but cannot start or end with an underscore"
)
GROUP_NAME_ERROR = (
    "Group Name must be alphanumeric, can include underscores (_) "
    "but cannot start or end with an underscore"
)


def validation_errors(record) -> list[str]:
    with pytest.raises(InvalidDataValidationException) as exc_info:
        RecordValidator().execute(record)
    return exc_info.value.errors


@pytest.fixture
def product():
    return Record(
        id="PROD001",
        type="KLEVU_PRODUCT",
        relations={"parentProduct": {"values": ["PROD000"]}},
        attributes={"name": {"default": "Product One"}, "sku": "PROD001"},
        groups={"wholesale": {"attributes": {"price": 10}}},
        channels={
            "en_GB": {
                "attributes": {"url": "https://www.example.com/product-one"},
                "groups": {"wholesale": {"attributes": {"price": 8}}},
            }
        },
        display={"name": "Product One"},
    )


@pytest.mark.unit
class TestRecordValidator:
    """Tests for RecordValidator"""

    def test_valid_record(self, product):
        RecordValidator().execute(product)  # Should not raise

    def test_minimal_record(self):
        """Test a record with only id and type passes"""
        RecordValidator().execute(Record(id="1", type="KLEVU_CATEGORY"))

    def test_empty_id(self):
        assert validation_errors(Record(id="", type="bar")) == ["id: Record Id is required"]

    def test_whitespace_id_and_type(self):
        """Test errors for every field are reported in field order"""
        assert validation_errors(Record(id=" ", type="\t")) == [
            "id: Record Id is required",
            "type: Record Type is required",
        ]

    def test_mistyped_id(self):
        record = Record.model_construct(id=123, type="KLEVU_PRODUCT", attributes={})
        assert validation_errors(record) == ["id: Record Id must be string, received int"]

    def test_invalid_attribute_name(self):
        record = Record(id="1", type="KLEVU_PRODUCT", attributes={"_bad": "x", "good": "y"})
        assert validation_errors(record) == [f"attributes: [_bad] {ATTRIBUTE_NAME_ERROR}"]

    def test_mistyped_attributes(self):
        record = Record.model_construct(id="1", type="KLEVU_PRODUCT", attributes="name")
        assert validation_errors(record) == ["attributes: Attributes must be array, received str"]

    def test_mistyped_relations(self):
        record = Record.model_construct(id="1", type="KLEVU_PRODUCT", attributes={}, relations="parent")
        assert validation_errors(record) == ["relations: Relations must be array|null, received str"]

    def test_relations_contents_are_not_checked(self):
        record = Record(id="1", type="KLEVU_PRODUCT", relations={"_anything": "goes"})
        RecordValidator().execute(record)  # Should not raise

    def test_group_data_shape(self):
        record = Record(id="1", type="KLEVU_PRODUCT", groups={"grp": "wholesale"})
        assert validation_errors(record) == [
            "groups: [grp] Group data must be array, received str"
        ]

    def test_group_name(self):
        record = Record(id="1", type="KLEVU_PRODUCT", groups={"_grp": {"attributes": {}}})
        assert validation_errors(record) == [f"groups: [_grp] {GROUP_NAME_ERROR}"]

    def test_channel_errors_collapse_into_one_entry(self):
        """Test sibling errors in one channel are joined with a semicolon"""
        record = Record(
            id="1",
            type="KLEVU_PRODUCT",
            channels={"CHANNEL1": {"attributes": {"_a": 1}, "groups": {"_g": {}}}},
        )

        errors = validation_errors(record)

        assert len(errors) == 1
        assert errors[0].startswith("channels: [CHANNEL1] ")
        assert "; " in errors[0]
        assert errors[0] == (
            f"channels: [CHANNEL1] [_a] {ATTRIBUTE_NAME_ERROR}; [_g] {GROUP_NAME_ERROR}"
        )

    def test_channel_attribute_name_errors_joined(self):
        """Test a missing and an overlong attribute name in one channel"""
        long_name = "a" * 201
        record = Record(
            id="1",
            type="KLEVU_PRODUCT",
            channels={"CHANNEL1": {"attributes": {"": "x", long_name: "y"}}},
        )

        assert validation_errors(record) == [
            "channels: [CHANNEL1] [] Attribute Name is required; "
            f"[{long_name}] Attribute Name must be less than or equal to 200 characters"
        ]

    def test_nested_channel_group_attribute(self):
        """Test errors deep in a channel group carry every label"""
        record = Record(
            id="1",
            type="KLEVU_PRODUCT",
            channels={"ch": {"groups": {"grp": {"attributes": {"_bad": 1}}}}},
        )
        assert validation_errors(record) == [
            f"channels: [ch] [grp] [_bad] {ATTRIBUTE_NAME_ERROR}"
        ]

    def test_channel_names_allow_edge_underscores(self):
        record = Record(id="1", type="KLEVU_PRODUCT", channels={"_en_GB_": {"attributes": {}}})
        RecordValidator().execute(record)  # Should not raise

    def test_invalid_display_key(self):
        record = Record(id="1", type="KLEVU_PRODUCT", display={"_x": "y"})
        assert validation_errors(record) == [f"display: [_x] {ATTRIBUTE_NAME_ERROR}"]

    def test_multiple_fields_accumulate(self):
        record = Record(
            id="",
            type="KLEVU_PRODUCT",
            attributes={"bad_": 1},
            display={"_x": "y"},
        )
        assert validation_errors(record) == [
            "id: Record Id is required",
            f"attributes: [bad_] {ATTRIBUTE_NAME_ERROR}",
            f"display: [_x] {ATTRIBUTE_NAME_ERROR}",
        ]

    def test_non_record(self):
        with pytest.raises(InvalidTypeValidationException) as exc_info:
            RecordValidator().execute({"id": "1", "type": "KLEVU_PRODUCT"})

        assert exc_info.value.errors == ["Record must be instance of Record, received dict"]

    def test_disabled_field_validator(self):
        """Test None removes validation for a field"""
        validator = RecordValidator({"display": None})
        validator.execute(Record(id="1", type="KLEVU_PRODUCT", display={"_x": "y"}))

    def test_replaced_field_validator(self):
        """Test a supplied validator replaces the default for its field"""

        class RejectAll(BaseValidator):
            def execute(self, data):
                raise InvalidDataValidationException(errors=["rejected"])

        validator = RecordValidator({"type": RejectAll()})

        with pytest.raises(InvalidDataValidationException) as exc_info:
            validator.execute(Record(id="", type="KLEVU_PRODUCT"))

        assert exc_info.value.errors == ["id: Record Id is required", "type: rejected"]

    def test_validator_lists(self):
        validator = RecordValidator({"id": [IdValidator(), IdValidator()]})
        assert validator.is_valid(Record(id="1", type="KLEVU_PRODUCT"))

    @given(
        record_id=st.text(min_size=1).filter(lambda value: value.strip()),
        record_type=st.text(min_size=1).filter(lambda value: value.strip()),
    )
    def test_any_non_blank_id_and_type_pass(self, record_id, record_type):
        assert RecordValidator().is_valid(Record(id=record_id, type=record_type))


@pytest.mark.unit
class TestNestedRowsValidators:
    """Tests for GroupsValidator and ChannelsValidator messages"""

    def test_failing_row_positions_in_message(self):
        with pytest.raises(InvalidDataValidationException) as exc_info:
            GroupsValidator().execute({"_a": {}, "ok": {}, "b": "x"})

        assert exc_info.value.message == "Invalid row(s) for groups: 0, 2"
        assert exc_info.value.errors == [
            f"[_a] {GROUP_NAME_ERROR}",
            "[b] Group data must be array, received str",
        ]

    def test_null_rows_pass(self):
        GroupsValidator().execute(None)
        ChannelsValidator().execute(None)
        ChannelsValidator().execute({})

    def test_mistyped_channels(self):
        with pytest.raises(InvalidTypeValidationException) as exc_info:
            ChannelsValidator().execute(["en_GB"])

        assert exc_info.value.errors == ["Channels must be array or null, received list"]

    def test_null_nested_attributes_are_empty(self):
        ChannelsValidator().execute({"en_GB": {"attributes": None, "groups": None}})

    def test_empty_arrays_are_empty_rows(self):
        """Test empty JSON arrays nested in rows pass like empty maps"""
        GroupsValidator().execute({"wholesale": {"attributes": []}})
        ChannelsValidator().execute({"en_GB": [], "fr_FR": {"attributes": [], "groups": []}})
        ChannelsValidator().execute([])
