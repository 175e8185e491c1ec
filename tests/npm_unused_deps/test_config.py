r"""Tests for `config.py`."""

from textwrap import dedent

import pytest

from npm_unused_deps.config import Options, find_config_file, load_config, merge_options
from npm_unused_deps.utils import ConfigError

CONFIG = r"""
extensions: [js, mjs]
recursive: true
sections: dependencies
ignore:
  - typescript
exclude-dirs: [node_modules, dist]
error-on-unused: true
"""


def test_load_config(tmp_path) -> None:
    path = tmp_path / ".npm-unused-deps.yaml"
    path.write_text(CONFIG, encoding="utf-8")

    assert find_config_file(tmp_path) == path
    assert load_config(path) == {
        "extensions": ("js", "mjs"),
        "recursive": True,
        "sections": ("dependencies",),
        "ignore": ("typescript",),
        "exclude_dirs": ("node_modules", "dist"),
        "error_on_unused": True,
    }


def test_find_config_file_missing(tmp_path) -> None:
    assert find_config_file(tmp_path) is None


def test_empty_config(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == {}


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "unknown-option: 1\n",
        "recursive: maybe\n",
        "ignore: [1, 2]\n",
        "extensions: [js\n",
    ],
)
def test_invalid_config(tmp_path, content: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(dedent(content), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_merge_options() -> None:
    options = merge_options(
        Options(),
        {"recursive": True, "ignore": ("typescript",)},
        {"recursive": None, "ignore": ("eslint",), "error_on_unused": True},
    )
    assert options == Options(
        recursive=True,
        ignore=("eslint",),
        error_on_unused=True,
    )
