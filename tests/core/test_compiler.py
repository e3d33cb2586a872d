"""Tests for failure and output link computation."""

import pytest

from multisearch.automaton.compiler import compile_trie
from multisearch.automaton.trie import TrieBuilder
from multisearch.domain.errors import InvalidStateError
from multisearch.domain.types import ROOT


def _compile(*patterns: str):
    t = TrieBuilder()
    for p in patterns:
        t.insert(p, [p])
    return compile_trie(t)


class TestFailureLinks:
    """The classic he/she/his/hers example.

    Vertex numbering (creation order):
        1 h   2 he   3 s   4 sh   5 she   6 hi   7 his   8 her   9 hers
    """

    def setup_method(self):
        self.ac = _compile("he", "she", "his", "hers")

    def test_vertex_count(self):
        assert self.ac.vertex_count == 10
        assert self.ac.pattern_count == 4

    def test_root_links_to_itself(self):
        root = self.ac[ROOT]
        assert root.failure == ROOT
        assert root.output == ROOT

    def test_depth_one_fails_to_root(self):
        assert self.ac[1].failure == ROOT
        assert self.ac[3].failure == ROOT

    def test_deeper_failure_links(self):
        # "he" has only "e" as a proper suffix, and no pattern starts with "e".
        expected = {2: ROOT, 4: 1, 5: 2, 6: ROOT, 7: 3, 8: ROOT, 9: 3}
        actual = {i: self.ac[i].failure for i in expected}
        assert actual == expected

    def test_output_links(self):
        # Terminals point at themselves, everything else here at root.
        expected = {1: ROOT, 2: 2, 3: ROOT, 4: ROOT, 5: 5, 6: ROOT, 7: 7, 8: ROOT, 9: 9}
        actual = {i: self.ac[i].output for i in expected}
        assert actual == expected

    def test_children_are_indices(self):
        assert dict(self.ac[ROOT].children) == {"h": 1, "s": 3}
        assert dict(self.ac[2].children) == {"r": 8}


class TestOutputLinks:
    """Output links skip over non-terminal failure targets."""

    def test_non_terminal_inherits_output(self):
        # "ba" fails to "a", which is terminal.
        ac = _compile("a", "bab")
        assert ac[3].failure == 1
        assert not ac[3].is_terminal
        assert ac[3].output == 1

    def test_output_chain_reaches_every_terminal_suffix(self):
        ac = _compile("abcd", "bcd", "cd", "d")
        # Walk abcd -> bcd -> cd -> d via failure links of terminals.
        chain = []
        v = ac[4].output
        while v != ROOT:
            chain.append(ac[v].length)
            v = ac[ac[v].failure].output
        assert chain == [4, 3, 2, 1]

    def test_lengths_only_on_terminals(self):
        ac = _compile("abc")
        assert [v.length for v in ac] == [None, None, None, 3]


class TestFrozenAutomaton:
    """The compiled automaton is read-only."""

    def test_children_mapping_is_read_only(self):
        ac = _compile("ab")
        with pytest.raises(TypeError):
            ac[ROOT].children["z"] = 5  # type: ignore[index]

    def test_ids_are_frozenset(self):
        ac = _compile("ab")
        assert isinstance(ac[2].ids, frozenset)

    def test_compile_does_not_mutate_trie(self):
        t = TrieBuilder()
        t.insert("ab", [1])
        compile_trie(t)
        assert t.vertex_count == 3
        assert t.vertices[2].ids == {1}

    def test_empty_trie_compiles_to_root_only(self):
        ac = compile_trie(TrieBuilder())
        assert ac.vertex_count == 1
        assert ac.pattern_count == 0


class TestCompileIsOneShot:
    """Compiling closes the trie."""

    def test_compile_closes_trie(self):
        t = TrieBuilder()
        t.insert("ab", [1])
        assert not t.closed
        compile_trie(t)
        assert t.closed

    def test_compile_twice_rejected(self):
        t = TrieBuilder()
        t.insert("ab", [1])
        compile_trie(t)
        with pytest.raises(InvalidStateError, match="already been compiled"):
            compile_trie(t)

    def test_insert_after_compile_rejected(self):
        t = TrieBuilder()
        t.insert("ab", [1])
        compile_trie(t)
        with pytest.raises(InvalidStateError, match="compiled trie"):
            t.insert("cd", [2])
        assert t.vertex_count == 3

    def test_empty_trie_compiles_once(self):
        t = TrieBuilder()
        compile_trie(t)
        with pytest.raises(InvalidStateError):
            compile_trie(t)
