"""Shared fixtures for dep_roulette tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dep_roulette.settings import Settings

NESTED_LOCK = {
    "name": "my-app",
    "version": "0.0.1",
    "lockfileVersion": 1,
    "requires": True,
    "dependencies": {
        "a": {"version": "1.0.0"},
        "b": {
            "version": "2.0.0",
            "requires": {"c": "^3.0.0"},
            "dependencies": {"c": {"version": "3.0.0"}},
        },
    },
}

YARN_V1_LOCK = """\
# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.
# yarn lockfile v1


"@babel/code-frame@^7.0.0", "@babel/code-frame@^7.10.4":
  version "7.12.13"
  resolved "https://registry.yarnpkg.com/@babel/code-frame/-/code-frame-7.12.13.tgz#dcfc826beef65e75c50e21d3837d7d95798dd658"
  integrity sha512-HV1Cm0Q3ZrpCR93tkWOYiuYIgLxZXZFVG2VgK+MBWjUqZTundupbfx2aXarXuw5Ko5aMcjtJgbSs4vUGBS5v6g==
  dependencies:
    "@babel/highlight" "^7.12.13"

left-pad@^1.3.0:
  version "1.3.0"
  resolved "https://registry.yarnpkg.com/left-pad/-/left-pad-1.3.0.tgz#5b8a3a7765dfe001261dde915589e782f8c94d1e"

lodash@^4.17.15, lodash@^4.17.21:
  version "4.17.21"
"""


@pytest.fixture
def nested_lock() -> dict:
    return json.loads(json.dumps(NESTED_LOCK))


@pytest.fixture
def npm_project(tmp_path: Path) -> Path:
    """A project directory holding a v1 package-lock.json."""
    (tmp_path / "package-lock.json").write_text(json.dumps(NESTED_LOCK), encoding="utf-8")
    return tmp_path


@pytest.fixture
def yarn_project(tmp_path: Path) -> Path:
    """A project directory holding a Yarn 1 yarn.lock."""
    (tmp_path / "yarn.lock").write_text(YARN_V1_LOCK, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(root=tmp_path, timeout=5.0)
