"""Tests for segmented path lookup and assignment."""

import copy
import pickle

from jira_projector.paths import ABSENT, assign_path, resolve_path, split_path


class TestAbsent:
    """Tests for the ABSENT sentinel."""

    def test_is_falsy(self):
        assert not ABSENT

    def test_is_not_none(self):
        assert ABSENT is not None

    def test_repr(self):
        assert repr(ABSENT) == "ABSENT"

    def test_survives_copy_and_pickle(self):
        """Copies must keep identity so `is ABSENT` checks still hold."""
        assert copy.deepcopy(ABSENT) is ABSENT
        assert pickle.loads(pickle.dumps(ABSENT)) is ABSENT


class TestSplitPath:
    """Tests for split_path()."""

    def test_single_key(self):
        assert split_path("total") == ["total"]

    def test_dotted(self):
        assert split_path("fields.status.name") == ["fields", "status", "name"]

    def test_bracket_index(self):
        assert split_path("issues[0].key") == ["issues", "0", "key"]

    def test_escaped_dot_stays_in_segment(self):
        assert split_path("meta.gpt-3\\.5") == ["meta", "gpt-3.5"]

    def test_empty_segments_dropped(self):
        assert split_path(".a..b.") == ["a", "b"]

    def test_empty_path(self):
        assert split_path("") == []


class TestResolvePath:
    """Tests for resolve_path()."""

    def test_flat_key(self):
        assert resolve_path({"key": "ABC-1"}, "key") == "ABC-1"

    def test_nested_key(self):
        source = {"issues": {"total": 7}}
        assert resolve_path(source, "issues.total") == 7

    def test_sequence_index(self):
        source = {"issues": [{"key": "A"}, {"key": "B"}]}
        assert resolve_path(source, "issues.1.key") == "B"
        assert resolve_path(source, "issues[0].key") == "A"

    def test_exact_dotted_key_wins(self):
        """A key that itself contains dots is matched before segmenting."""
        source = {"a.b": 1, "a": {"b": 2}}
        assert resolve_path(source, "a.b") == 1

    def test_missing_key_is_absent(self):
        assert resolve_path({}, "issues") is ABSENT

    def test_missing_midway_is_absent(self):
        assert resolve_path({"fields": {}}, "fields.status.name") is ABSENT

    def test_none_midway_is_absent(self):
        assert resolve_path({"fields": {"assignee": None}}, "fields.assignee.displayName") is ABSENT

    def test_none_final_value_is_present(self):
        assert resolve_path({"assignee": None}, "assignee") is None

    def test_scalar_source_is_absent(self):
        assert resolve_path("ABC-1", "key") is ABSENT
        assert resolve_path(42, "key") is ABSENT
        assert resolve_path(None, "key") is ABSENT

    def test_out_of_range_index_is_absent(self):
        assert resolve_path([1, 2], "2") is ABSENT

    def test_non_numeric_index_on_sequence_is_absent(self):
        assert resolve_path([1, 2], "first") is ABSENT
        assert resolve_path([1, 2], "-1") is ABSENT

    def test_non_ascii_digit_index_is_absent(self):
        assert resolve_path({"issues": [1, 2]}, "issues.²") is ABSENT
        assert resolve_path({"issues": [1, 2]}, "issues.١") is ABSENT

    def test_empty_path_is_absent(self):
        assert resolve_path({"a": 1}, "") is ABSENT

    def test_falsy_values_are_present(self):
        source = {"zero": 0, "empty": "", "no": False, "list": []}
        assert resolve_path(source, "zero") == 0
        assert resolve_path(source, "empty") == ""
        assert resolve_path(source, "no") is False
        assert resolve_path(source, "list") == []


class TestAssignPath:
    """Tests for assign_path()."""

    def test_flat(self):
        assert assign_path({}, "total", 3) == {"total": 3}

    def test_nested_creates_mappings(self):
        assert assign_path({}, "meta.total", 3) == {"meta": {"total": 3}}

    def test_nested_extends_existing_mapping(self):
        target = {"meta": {"count": 1}}
        assign_path(target, "meta.total", 3)
        assert target == {"meta": {"count": 1, "total": 3}}

    def test_does_not_mutate_shared_intermediate(self):
        shared = {"count": 1}
        target = {"meta": shared}
        assign_path(target, "meta.total", 3)
        assert shared == {"count": 1}
        assert target["meta"] == {"count": 1, "total": 3}

    def test_replaces_non_mapping_intermediate(self):
        target = {"meta": "scalar"}
        assign_path(target, "meta.total", 3)
        assert target == {"meta": {"total": 3}}
