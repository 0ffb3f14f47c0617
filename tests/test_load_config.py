from pathlib import Path

import pytest

from wordweave.core.errors import ConfigError
from wordweave.core.io.load_config import DEFAULT_CONFIG, load_and_merge, load_config_file


def test_defaults_without_file():
    cfg = load_and_merge(None)
    assert cfg == DEFAULT_CONFIG
    assert cfg["output"] == "merged.txt"
    assert cfg["fd_warning_threshold"] == 100


def test_file_overrides_defaults(tmp_path: Path):
    p = tmp_path / "wordweave.yaml"
    p.write_text("output: out/all.txt\ndedup: exact\nprogress_every: 50\n", encoding="utf-8")
    cfg = load_and_merge(str(p))
    assert cfg["output"] == "out/all.txt"
    assert cfg["dedup"] == "exact"
    assert cfg["progress_every"] == 50
    assert cfg["buffer_size"] == DEFAULT_CONFIG["buffer_size"]


def test_empty_file_means_no_overrides(tmp_path: Path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config_file(p) == {}


@pytest.mark.parametrize(
    "body",
    [
        "- just\n- a list\n",
        "colour: blue\n",
        "dedup: bloom\n",
        "progress_every: 0\n",
        "buffer_size: true\n",
        "output: ''\n",
        "output: [unclosed\n",
    ],
)
def test_invalid_files_raise(tmp_path: Path, body: str):
    p = tmp_path / "bad.yaml"
    p.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config_file(p)


def test_missing_file_raises_file_not_found(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_and_merge(str(tmp_path / "absent.yaml"))


def test_unreadable_config_paths_raise_config_error(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config_file(tmp_path)

    p = tmp_path / "latin1.yaml"
    p.write_bytes(b"output: caf\xe9.txt\n")
    with pytest.raises(ConfigError):
        load_config_file(p)
