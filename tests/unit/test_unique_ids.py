"""
Unit tests for the id normalisation used when deleting records by id.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from klevu.services import DeleteService

record_ids = st.lists(st.one_of(st.text(max_size=12), st.integers(), st.none()), max_size=40)


@pytest.mark.unit
class TestUniqueIds:
    """Tests for DeleteService.unique_ids"""

    def test_trims_and_keeps_first_occurrence(self):
        assert DeleteService.unique_ids([" b", "a", "b ", "A", None, ""]) == ["b", "a", "A", ""]

    @given(record_ids)
    def test_idempotent(self, ids):
        once = DeleteService.unique_ids(ids)

        assert DeleteService.unique_ids(once) == once

    @given(record_ids)
    def test_no_duplicates_and_order_preserved(self, ids):
        unique = DeleteService.unique_ids(ids)
        normalised = ["" if record_id is None else str(record_id).strip() for record_id in ids]

        assert len(unique) == len(set(unique))
        assert set(unique) == set(normalised)
        assert unique == sorted(unique, key=normalised.index)
