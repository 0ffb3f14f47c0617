"""Weave merge: round-robin reading across inputs with run-scoped deduplication."""
