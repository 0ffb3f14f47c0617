import pytest

from wordweave.core.merge import line_set
from wordweave.core.merge.line_set import ExactLineSet, HashedLineSet, line_hash, new_seen_set


def test_line_hash_is_stable_and_64_bit():
    assert line_hash(b"password") == line_hash(b"password")
    assert line_hash(b"password") != line_hash(b"Password")
    assert 0 <= line_hash(b"x") < 2**64


def test_hashed_set_add_reports_first_insert_only():
    s = HashedLineSet()
    assert s.add(b"alpha")
    assert not s.add(b"alpha")
    assert s.add(b"")
    assert len(s) == 2
    assert b"alpha" in s
    assert s.approx_bytes() > 0


def test_hash_collision_is_treated_as_duplicate(monkeypatch):
    monkeypatch.setattr(line_set, "line_hash", lambda line: 7)
    s = HashedLineSet()
    assert s.add(b"first")
    assert not s.add(b"second")


def test_exact_set_survives_collisions(monkeypatch):
    monkeypatch.setattr(line_set, "line_hash", lambda line: 7)
    s = ExactLineSet()
    assert s.add(b"first")
    assert s.add(b"second")
    assert not s.add(b"first")
    assert len(s) == 2


def test_new_seen_set_modes():
    assert isinstance(new_seen_set("hash"), HashedLineSet)
    assert isinstance(new_seen_set("exact"), ExactLineSet)
    with pytest.raises(ValueError):
        new_seen_set("bloom")
