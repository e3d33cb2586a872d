"""Aho-Corasick core: trie builder, compiler and streaming matcher."""

from multisearch.automaton.automaton import Automaton, Vertex
from multisearch.automaton.compiler import compile_trie
from multisearch.automaton.matcher import StreamingMatcher, iter_matches
from multisearch.automaton.trie import ProtoVertex, TrieBuilder

__all__ = [
    "Automaton",
    "ProtoVertex",
    "StreamingMatcher",
    "TrieBuilder",
    "Vertex",
    "compile_trie",
    "iter_matches",
]
