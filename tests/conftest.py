from __future__ import annotations

import pathlib
import typing as tp

import pytest


@pytest.fixture
def write_conf(tmp_path: pathlib.Path) -> tp.Callable[[str], str]:
    def write(text: str, name: str = "timers.conf") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write
