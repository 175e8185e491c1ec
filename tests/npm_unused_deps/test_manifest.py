r"""Tests for `manifest.py`."""

from textwrap import dedent

import pytest

from npm_unused_deps.manifest import (
    DeclaredDependency,
    get_declared_dependencies,
    get_dependency_names,
    read_manifest,
    yield_dependencies_from_text,
)
from npm_unused_deps.utils import ManifestReadError

MANIFEST = r"""
{
    "name": "test-package",
    "version": "1.0.0",
    "devDependencies": {
        "jest": "^29.0.0"
    },
    "dependencies": {
        "left-pad": "1.0.0",
        "react": "18.0.0"
    }
}
"""


def test_simple_manifest() -> None:
    text = '{"dependencies": {"left-pad": "1.0.0", "react": "18.0.0"}}'
    deps = get_declared_dependencies(text)
    assert get_dependency_names(deps) == ["left-pad", "react"]


def test_both_sections_in_manifest_order() -> None:
    deps = get_declared_dependencies(MANIFEST)
    assert deps == [
        DeclaredDependency("jest", "^29.0.0", "devDependencies"),
        DeclaredDependency("left-pad", "1.0.0", "dependencies"),
        DeclaredDependency("react", "18.0.0", "dependencies"),
    ]


def test_selected_sections() -> None:
    deps = get_declared_dependencies(MANIFEST, ["dependencies"])
    assert get_dependency_names(deps) == ["left-pad", "react"]


def test_no_dependency_section() -> None:
    text = '{"name": "test-package", "version": "1.0.0"}'
    assert get_declared_dependencies(text) == []


def test_not_an_object() -> None:
    assert get_declared_dependencies('["dependencies"]') == []


def test_invalid_json_falls_back_to_text() -> None:
    text = dedent(
        r"""
        {
            // comments are not valid JSON
            "dependencies": {
                "express": "^4.18.2",
                "lodash": "4.17.21",
            },
            "devDependencies": {
                "mocha": "10.0.0",
            },
        }
        """
    )
    deps = get_declared_dependencies(text)
    # only the first section is captured by the text match
    assert deps == [
        DeclaredDependency("express", "^4.18.2", "dependencies"),
        DeclaredDependency("lodash", "4.17.21", "dependencies"),
    ]


def test_text_match_without_section() -> None:
    assert list(yield_dependencies_from_text('{"name": "x",}')) == []


def test_text_match_keeps_duplicates() -> None:
    text = '{"dependencies": {"react": "18.0.0", "react": "17.0.0"}'
    names = [dep.name for dep in yield_dependencies_from_text(text)]
    assert names == ["react", "react"]


def test_read_manifest(tmp_path) -> None:
    path = tmp_path / "package.json"
    path.write_text(MANIFEST, encoding="utf-8")
    assert read_manifest(path) == MANIFEST


def test_read_missing_manifest(tmp_path) -> None:
    with pytest.raises(ManifestReadError):
        read_manifest(tmp_path / "package.json")


def test_json_manifest_keeps_duplicates() -> None:
    text = '{"dependencies": {"a": "1", "b": "1", "a": "2"}}'
    assert get_declared_dependencies(text) == [
        DeclaredDependency("a", "1", "dependencies"),
        DeclaredDependency("b", "1", "dependencies"),
        DeclaredDependency("a", "2", "dependencies"),
    ]


def test_text_match_honors_sections() -> None:
    text = '{"devDependencies": {"jest": "1",}, "dependencies": {"react": "1",},}'
    deps = get_declared_dependencies(text, ["dependencies"])
    assert deps == [DeclaredDependency("react", "1", "dependencies")]


def test_text_match_without_sections() -> None:
    text = '{"dependencies": {"react": "1",},}'
    assert get_declared_dependencies(text, []) == []
