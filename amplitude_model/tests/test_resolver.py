"""Tests for name-based record lookup."""

import pytest

from amplitude_model.errors import DuplicateNameError, InvalidComponentError
from amplitude_model.serialization.document import ParameterPoint
from amplitude_model.serialization.resolver import index_by_name, record_name


class TestIndexByName:

    def test_maps_name_to_record(self):
        records = [{"name": "a", "value": 1}, {"name": "b", "value": 2}]
        index = index_by_name(records)
        assert index == {"a": records[0], "b": records[1]}

    def test_preserves_order(self):
        records = [{"name": n} for n in ("z", "a", "m")]
        assert list(index_by_name(records)) == ["z", "a", "m"]

    def test_extract_projects_values(self):
        records = [{"name": "mass", "value": 1.86}, {"name": "width", "value": 0.05}]
        context = index_by_name(records, lambda r: r["value"])
        assert context == {"mass": 1.86, "width": 0.05}

    def test_duplicate_names_fail_fast(self):
        records = [{"name": "a", "value": 1}, {"name": "a", "value": 2}]
        with pytest.raises(DuplicateNameError, match="Duplicate name 'a' in points"):
            index_by_name(records, context="points")

    def test_records_without_name_are_rejected(self):
        with pytest.raises(InvalidComponentError, match="no string 'name'"):
            index_by_name([{"value": 1}])

    def test_objects_with_name_attribute(self):
        points = [ParameterPoint("p1"), ParameterPoint("p2")]
        index = index_by_name(points)
        assert index["p2"] is points[1]

    def test_empty_input(self):
        assert index_by_name([]) == {}


def test_record_name_rejects_non_string_names():
    with pytest.raises(InvalidComponentError):
        record_name({"name": 3})
