from wordweave.core.resolve.glob_match import has_wildcard, wildcard_match


def test_star_suffix_full_match():
    assert wildcard_match("a.txt", "*.txt")
    assert not wildcard_match("a.txt.bak", "*.txt")


def test_question_mark_is_exactly_one_char():
    assert wildcard_match("file1.txt", "file?.txt")
    assert not wildcard_match("file12.txt", "file?.txt")
    assert not wildcard_match("file.txt", "file?.txt")


def test_star_matches_empty_and_anything():
    assert wildcard_match("", "*")
    assert wildcard_match("anything at all", "*")
    assert wildcard_match("abc", "abc***")
    assert not wildcard_match("", "?")


def test_backtracking_over_multiple_stars():
    assert wildcard_match("rockyou-2024.part1.txt", "rock*-*.part?.txt")
    assert wildcard_match("aaab", "*a*b")
    assert not wildcard_match("aaac", "*a*b")
    assert wildcard_match("mississippi", "m*iss*ppi")


def test_literal_is_case_sensitive_and_whole_string():
    assert wildcard_match("words.txt", "words.txt")
    assert not wildcard_match("Words.txt", "words.txt")
    assert not wildcard_match("words.txt", "words")


def test_no_character_classes():
    assert not wildcard_match("a", "[a]")
    assert wildcard_match("[a]", "[a]")


def test_has_wildcard():
    assert has_wildcard("*.txt")
    assert has_wildcard("list?.txt")
    assert not has_wildcard("lists/plain.txt")
