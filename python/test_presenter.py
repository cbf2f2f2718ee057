"""
Tests for revdiff.presenter — segments and stable keys.

Run: python3 test_presenter.py
From: python/
"""

import sys

sys.path.insert(0, '.')

from pydantic import ValidationError

from revdiff.aligner import align
from revdiff.models import Segment, SegmentRole
from revdiff.presenter import present, summarize
from revdiff.tokenizer import tokenize


def _present(original, revised):
    return present(align(tokenize(original), tokenize(revised)))


def _roles(segments):
    return [s.role for s in segments]


def test_substitution_segments():
    original, revised = _present("The cat sat", "The cat sit")

    assert [s.text for s in original] == ["The", " ", "cat", " ", "sat"]
    assert _roles(original) == [SegmentRole.UNCHANGED] * 4 + [SegmentRole.REPLACED]
    assert original[-1].stable_key == "4-substitute-original"

    assert [s.text for s in revised] == ["The", " ", "cat", " ", "sit"]
    assert revised[-1].role is SegmentRole.REPLACED
    assert revised[-1].stable_key == "4-substitute-revised"
    print("PASS: substitution segments")


def test_matches_share_keys():
    original, revised = _present("The cat sat", "The cat sit")
    original_keys = {s.stable_key for s in original if s.role is SegmentRole.UNCHANGED}
    revised_keys = {s.stable_key for s in revised if s.role is SegmentRole.UNCHANGED}
    assert original_keys == revised_keys == {"0-match", "1-match", "2-match", "3-match"}
    print("PASS: matched segments share keys")


def test_insert_only_in_revised():
    original, revised = _present("I like tea", "I really like tea")
    assert "".join(s.text for s in original) == "I like tea"
    assert all(s.role is SegmentRole.UNCHANGED for s in original)

    added = [s for s in revised if s.role is SegmentRole.ADDED]
    assert added == [Segment(text="really", role=SegmentRole.ADDED, stable_key="2-insert")]
    # The inserted space is passed through unstyled
    assert revised[3] == Segment(text=" ", role=SegmentRole.UNCHANGED, stable_key="3-insert")
    print("PASS: insert only in revised view")


def test_delete_only_in_original():
    original, revised = _present("Quick fix now", "Quick fix")
    assert "".join(s.text for s in revised) == "Quick fix"
    assert revised[-1].text == "fix"
    assert original[-2] == Segment(text=" ", role=SegmentRole.UNCHANGED, stable_key="3-delete")
    assert original[-1] == Segment(text="now", role=SegmentRole.REMOVED, stable_key="4-delete")
    print("PASS: delete only in original view")


def test_spacing_change_is_not_flagged():
    original, revised = _present("a  b", "a b")
    assert [s.text for s in original] == ["a", "  ", "b"]
    assert [s.text for s in revised] == ["a", " ", "b"]
    assert all(s.role is SegmentRole.UNCHANGED for s in original + revised)
    print("PASS: spacing change not flagged")


def test_views_are_lossless():
    pairs = [
        ("Their going too the store.", "They're going to the store."),
        ("line one\n\nline two", "line one\nline 2"),
        ("", "new"),
        ("old", ""),
    ]
    for original_text, revised_text in pairs:
        original, revised = _present(original_text, revised_text)
        assert "".join(s.text for s in original) == original_text
        assert "".join(s.text for s in revised) == revised_text
    print("PASS: views are lossless")


def test_keys_unique_and_stable():
    ops = align(tokenize("one two three four"), tokenize("one 2 three five six"))
    first = present(ops)
    second = present(ops)
    assert first == second

    for segments in first:
        keys = [s.stable_key for s in segments]
        assert len(keys) == len(set(keys))
    print("PASS: keys unique and stable")


def test_segments_are_frozen():
    original, _ = _present("a", "b")
    try:
        original[0].text = "changed"
    except ValidationError:
        pass
    else:
        raise AssertionError("Segment should be frozen")
    print("PASS: segments are frozen")


def test_summarize_counts():
    stats = summarize(align(tokenize("Quick fix now"), tokenize("Quick fix")))
    assert stats.matched == 3
    assert stats.deleted == 2
    assert stats.substituted == 0 and stats.inserted == 0
    assert stats.edit_distance == 2
    assert stats.changed_words == 1
    assert stats.has_changes
    print("PASS: summarize counts")


if __name__ == "__main__":
    tests = [
        test_substitution_segments,
        test_matches_share_keys,
        test_insert_only_in_revised,
        test_delete_only_in_original,
        test_spacing_change_is_not_flagged,
        test_views_are_lossless,
        test_keys_unique_and_stable,
        test_segments_are_frozen,
        test_summarize_counts,
    ]

    passed = 0
    failed = 0
    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"FAIL: {test.__name__}: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print(f"\n{'='*60}")
    print(f"Results: {passed} passed, {failed} failed out of {len(tests)} tests")
    if failed:
        sys.exit(1)
