"""Tests for listing name patterns and exclusion rules."""

from __future__ import annotations

from filespec.listing import NameMatcher, compile_excludes
from filespec.listing.matching import is_excluded


def test_star_extension():
    matcher = NameMatcher("*.cpp")
    assert matcher.matches("main.cpp")
    assert matcher.matches("MAIN.CPP")
    assert not matcher.matches("main.h")
    assert not matcher.matches("main.cpp.bak")


def test_star_dot_star_matches_every_name():
    matcher = NameMatcher("*.*")
    assert matcher.matches("Makefile")
    assert matcher.matches("a.b.c")


def test_question_mark_is_one_character():
    matcher = NameMatcher("?.txt")
    assert matcher.matches("a.txt")
    assert not matcher.matches("ab.txt")


def test_literal_names_are_case_insensitive():
    matcher = NameMatcher("ReadMe.md")
    assert matcher.matches("README.md")
    assert not matcher.matches("README.mdx")


def test_gitignore_syntax_is_literal():
    assert NameMatcher("[x].txt").matches("[x].txt")
    assert not NameMatcher("[x].txt").matches("x.txt")
    assert NameMatcher("#notes").matches("#notes")
    assert NameMatcher("!keep").matches("!keep")


def test_empty_pattern_matches_nothing():
    assert not NameMatcher("").matches("anything")
    assert not NameMatcher("*").matches("")


def test_compile_excludes_empty():
    assert compile_excludes([]) is None
    assert compile_excludes(["", "  ", "# comment"]) is None


def test_excludes_folder_patterns_only_match_folders():
    spec = compile_excludes(["build/", "*.log"])
    assert is_excluded(spec, "build", is_folder=True)
    assert not is_excluded(spec, "build", is_folder=False)
    assert is_excluded(spec, "run.log", is_folder=False)
    assert not is_excluded(spec, "run.txt", is_folder=False)
    assert not is_excluded(None, "build", is_folder=True)
