from correction_editor.ir import Token
from correction_editor.tokens import find_index, present, render, splice


def _stream():
    return [Token(1, "The", " "), Token(2, "cat", " "), Token(3, "sat", ".")]


def test_present_requires_contiguous_order():
    s = _stream()
    assert present([Token(1, "The"), Token(2, "cat")], s)
    assert present([Token(2, "cat"), Token(3, "sat")], s)
    assert not present([Token(1, "The"), Token(3, "sat")], s)
    assert not present([Token(2, "cat"), Token(1, "The")], s)
    assert not present([Token(9, "dog")], s)


def test_present_empty_run():
    assert present([], _stream())


def test_splice_replaces_run_and_keeps_input():
    s = _stream()
    out = splice(s, [Token(2, "cat", " "), Token(3, "sat", ".")], [Token(4, "dog", " "), Token(5, "ran", "!")])
    assert render(out) == "The dog ran!"
    assert render(s) == "The cat sat."


def test_splice_missing_run_is_noop():
    s = _stream()
    out = splice(s, [Token(1, "The"), Token(3, "sat")], [Token(9, "x")])
    assert out == s
    assert out is not s


def test_render_and_find_index():
    s = _stream()
    assert render(s) == "The cat sat."
    assert find_index(s, 3) == 2
    assert find_index(s, 42) == -1


def test_render_round_trips_original(scenario):
    assert render(scenario.rules_applied[0].original_sentence) == "hzve be befor"
