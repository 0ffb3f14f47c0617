from __future__ import annotations


WILDCARDS = ("*", "?")


def has_wildcard(pattern: str) -> bool:
    return any(ch in pattern for ch in WILDCARDS)


def wildcard_match(candidate: str, pattern: str) -> bool:
    """Return True when `pattern` matches the whole of `candidate`.

    `*` matches any run of characters (including none), `?` matches exactly
    one. Everything else is literal; there is no escaping and no character
    classes. On a mismatch the scan falls back to the last `*` seen and lets
    it swallow one more character.
    """

    c_idx = 0
    p_idx = 0
    star_idx = -1
    star_match = 0

    while c_idx < len(candidate):
        if p_idx < len(pattern) and pattern[p_idx] in ("?", candidate[c_idx]):
            c_idx += 1
            p_idx += 1
        elif p_idx < len(pattern) and pattern[p_idx] == "*":
            star_idx = p_idx
            star_match = c_idx
            p_idx += 1
        elif star_idx != -1:
            p_idx = star_idx + 1
            star_match += 1
            c_idx = star_match
        else:
            return False

    # Trailing stars match the empty remainder.
    while p_idx < len(pattern) and pattern[p_idx] == "*":
        p_idx += 1

    return p_idx == len(pattern)
