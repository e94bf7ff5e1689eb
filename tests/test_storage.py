"""Tests for JSON snapshots of the current generation."""

import json

import pytest

from lifelike.automaton import HIGHLIFE, SparseLife
from lifelike.codec import encode
from lifelike.patterns import get_pattern
from lifelike.storage import (
    SNAPSHOT_VERSION,
    SnapshotError,
    from_dict,
    load_snapshot,
    save_snapshot,
    to_dict,
)


@pytest.fixture
def glider_life() -> SparseLife:
    life = SparseLife(HIGHLIFE)
    life.insert_pattern_at(get_pattern("glider"), -40, 25)
    life.run(6)
    return life


class TestRoundTrip:
    def test_file_round_trip(self, tmp_path, glider_life) -> None:
        path = save_snapshot(glider_life, tmp_path / "snaps" / "glider.json")
        loaded = load_snapshot(path)

        assert loaded.cells == glider_life.cells
        assert dict(loaded.ages) == dict(glider_life.ages)
        assert loaded.rule == HIGHLIFE
        assert loaded.generation == 6
        assert loaded.total_births == glider_life.total_births
        assert loaded.total_deaths == glider_life.total_deaths

    def test_loaded_life_keeps_running(self, tmp_path, glider_life) -> None:
        loaded = load_snapshot(save_snapshot(glider_life, tmp_path / "g.json"))
        glider_life.step()
        loaded.step()
        assert loaded.cells == glider_life.cells

    def test_dict_is_json_compatible(self, glider_life) -> None:
        data = json.loads(json.dumps(to_dict(glider_life)))
        assert from_dict(data).cells == glider_life.cells

    def test_cells_stored_as_packed_keys(self, glider_life) -> None:
        data = to_dict(glider_life)
        assert data["cells"] == sorted(glider_life.cells)


class TestErrors:
    def test_wrong_version(self, glider_life) -> None:
        data = to_dict(glider_life)
        data["version"] = SNAPSHOT_VERSION + 1
        with pytest.raises(SnapshotError, match="Unsupported snapshot version"):
            from_dict(data)

    def test_missing_cells(self, glider_life) -> None:
        data = to_dict(glider_life)
        del data["cells"]
        with pytest.raises(SnapshotError):
            from_dict(data)

    def test_bad_rule(self, glider_life) -> None:
        data = to_dict(glider_life)
        data["rule"] = "nonsense"
        with pytest.raises(SnapshotError):
            from_dict(data)

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotError):
            load_snapshot(path)

    def test_not_an_object(self, tmp_path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(SnapshotError):
            load_snapshot(path)

    def test_ages_not_an_object(self, glider_life) -> None:
        data = to_dict(glider_life)
        data["ages"] = [1, 2]
        with pytest.raises(SnapshotError, match="ages"):
            from_dict(data)


class TestKeyCanonicalization:
    def test_aliased_keys_collapse_to_one_cell(self) -> None:
        data = to_dict(SparseLife())
        data["cells"] = [encode(0, 0), 2 ** 32, encode(1, 0)]
        life = from_dict(data)
        assert life.population == 2
        assert life.coords() == [(0, 0), (1, 0)]

    def test_aliased_age_key_attaches_to_cell(self) -> None:
        data = to_dict(SparseLife())
        data["cells"] = [2 ** 32 + encode(3, -4)]
        data["ages"] = {str(2 ** 32 + encode(3, -4)): 7}
        life = from_dict(data)
        assert life.coords() == [(3, -4)]
        assert life.age_at(3, -4) == 7
