"""Pattern resolution: literal paths and `*`/`?` globs into concrete input files.

Matching is kept separate from directory access so that the matcher can be
exercised without touching the filesystem.
"""
