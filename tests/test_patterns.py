import pytest

from namemask.patterns import TargetPattern, normalize_text


def test_underscore_target_adds_spaced_variant():
    assert set(TargetPattern.from_string("john_doe").candidates) == {"john_doe", "john doe"}


def test_plain_target_has_single_candidate():
    assert TargetPattern.from_string("johndoe").candidates == ("johndoe",)


def test_candidates_are_lower_cased():
    assert set(TargetPattern.from_string("John_Doe").candidates) == {"john_doe", "john doe"}


@pytest.mark.parametrize("text", ["Hello, World.", "ALICE", "a.b,c", "", "j.o.h.n"])
def test_normalize_is_idempotent(text):
    once = normalize_text(text)
    assert normalize_text(once) == once


def test_normalize_strips_periods_and_commas():
    assert normalize_text("Mr. Doe, John.") == "mr doe john"


def test_matches_substring_case_insensitively():
    pattern = TargetPattern.from_string("alice")
    assert pattern.matches("@ALICE:\n\x0c")
    assert pattern.matches("hi alice123")
    assert not pattern.matches("bob")


def test_matches_through_ocr_noise():
    assert TargetPattern.from_string("alice").matches("Al.ice")
    assert TargetPattern.from_string("john doe").matches("John, Doe")


def test_spaced_rendering_matches_underscore_target():
    pattern = TargetPattern.from_string("john_doe")
    assert pattern.matches("John Doe")
    assert pattern.matches("john_doe")
    assert not pattern.matches("johndoe")


def test_empty_target_matches_everything():
    assert TargetPattern.from_string("").matches("anything at all")


def test_dotted_target_matches_its_own_rendering():
    pattern = TargetPattern.from_string("j.doe")
    assert pattern.candidates == ("jdoe",)
    assert pattern.matches("j.doe")
    assert pattern.matches("@J.Doe,\n")


def test_candidates_are_already_normalized():
    for raw in ["john_doe", "J.Doe", "doe,j", "Smith_J."]:
        for c in TargetPattern.from_string(raw).candidates:
            assert normalize_text(c) == c
