from rpdiceroller.parser import parse_roll, tokenize


def test_parse_is_deterministic():
    text = "4d6kh3+2d4-1r2"
    a = parse_roll(text)
    b = parse_roll(text)

    assert a == b
    assert a.notation == b.notation


def test_tokenize_splits_markers():
    kinds = [t.kind for t in tokenize("4d6kh3+5rd")]
    assert kinds == ["number", "die", "number", "keep", "number", "sign", "number", "repeat", "die"]


def test_tokenize_keeps_unknown_characters():
    tokens = tokenize("3dx*2")
    assert [t.kind for t in tokens] == ["number", "die", "other", "other", "number"]
    assert [t.text for t in tokens] == ["3", "d", "x", "*", "2"]
