"""Tests for automaton serialization round trips."""

import io
import pickle
import struct

import pytest

from multisearch.automaton.automaton import FORMAT_VERSION, MAGIC, Automaton
from multisearch.automaton.compiler import compile_trie
from multisearch.automaton.matcher import iter_matches
from multisearch.automaton.trie import TrieBuilder
from multisearch.domain.errors import InvalidArgumentError

from tests.conftest import SEASHELLS, SEASHELLS_EXPECTED, Keyword


def _seashells_automaton() -> Automaton:
    t = TrieBuilder()
    for kw in Keyword:
        t.insert(kw.value, [kw])
    return compile_trie(t)


class TestBinaryImage:
    """to_bytes / from_bytes."""

    def test_round_trip_preserves_vertex_table(self):
        ac = _seashells_automaton()
        restored = Automaton.from_bytes(ac.to_bytes())
        assert restored == ac
        for before, after in zip(ac, restored):
            assert dict(before.children) == dict(after.children)
            assert before.failure == after.failure
            assert before.output == after.output
            assert before.ids == after.ids
            assert before.length == after.length

    def test_round_trip_preserves_matches(self):
        restored = Automaton.from_bytes(_seashells_automaton().to_bytes())
        assert list(iter_matches(restored, SEASHELLS)) == SEASHELLS_EXPECTED

    def test_image_header(self):
        data = _seashells_automaton().to_bytes()
        magic, version, count = struct.unpack_from("!4sHI", data)
        assert magic == MAGIC
        assert version == FORMAT_VERSION
        assert count == _seashells_automaton().vertex_count

    def test_bad_magic(self):
        data = bytearray(_seashells_automaton().to_bytes())
        data[:4] = b"NOPE"
        with pytest.raises(InvalidArgumentError, match="bad magic"):
            Automaton.from_bytes(bytes(data))

    def test_unknown_version(self):
        data = bytearray(_seashells_automaton().to_bytes())
        struct.pack_into("!H", data, 4, FORMAT_VERSION + 1)
        with pytest.raises(InvalidArgumentError, match="version"):
            Automaton.from_bytes(bytes(data))

    def test_truncated_payload(self):
        data = _seashells_automaton().to_bytes()
        with pytest.raises(InvalidArgumentError, match="Truncated"):
            Automaton.from_bytes(data[:-5])

    def test_too_short(self):
        with pytest.raises(InvalidArgumentError, match="too short"):
            Automaton.from_bytes(b"MSAC")

    def test_vertex_count_mismatch(self):
        data = bytearray(_seashells_automaton().to_bytes())
        struct.pack_into("!I", data, 6, 3)
        with pytest.raises(InvalidArgumentError, match="mismatch"):
            Automaton.from_bytes(bytes(data))

    def test_corrupt_payload_bytes(self):
        data = bytearray(_seashells_automaton().to_bytes())
        data[-3:] = b"\xff\xff\xff"
        with pytest.raises(InvalidArgumentError, match="Corrupt"):
            Automaton.from_bytes(bytes(data))

    def test_payload_not_a_vertex_table(self):
        payload = pickle.dumps([1, 2, 3])
        data = (
            struct.pack("!4sHI", MAGIC, FORMAT_VERSION, 3)
            + struct.pack("!I", len(payload))
            + payload
        )
        with pytest.raises(InvalidArgumentError, match="Corrupt"):
            Automaton.from_bytes(data)

    def test_payload_rows_of_wrong_width(self):
        payload = pickle.dumps([((), 0, 0)])
        data = (
            struct.pack("!4sHI", MAGIC, FORMAT_VERSION, 1)
            + struct.pack("!I", len(payload))
            + payload
        )
        with pytest.raises(InvalidArgumentError, match="Corrupt"):
            Automaton.from_bytes(data)

    def test_dump_and_load(self, tmp_path):
        ac = _seashells_automaton()
        path = tmp_path / "seashells.msac"
        with open(path, "wb") as fp:
            ac.dump(fp)
        with open(path, "rb") as fp:
            restored = Automaton.load(fp)
        assert restored == ac

    def test_in_memory_stream(self):
        ac = _seashells_automaton()
        buf = io.BytesIO()
        ac.dump(buf)
        buf.seek(0)
        assert Automaton.load(buf) == ac


class TestPickle:
    """Automata are picklable directly."""

    def test_pickle_round_trip(self):
        ac = _seashells_automaton()
        restored = pickle.loads(pickle.dumps(ac))
        assert restored == ac
        assert list(iter_matches(restored, SEASHELLS)) == SEASHELLS_EXPECTED

    def test_restored_automaton_is_still_read_only(self):
        restored = pickle.loads(pickle.dumps(_seashells_automaton()))
        with pytest.raises(TypeError):
            restored.root.children["q"] = 1  # type: ignore[index]
