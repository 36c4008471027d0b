"""Pytest configuration and fixtures."""

import sys
import textwrap
from dataclasses import dataclass
from pathlib import Path

import pytest

from fieldcheck import constrained


@dataclass
class Account:
    """A record exercising every constraint kind once."""

    login: str = constrained("between:3,12", default="admin")
    pin: str = constrained("len:4", default="1234")
    role: str = constrained("in:admin,editor,viewer", default="viewer")
    age: int = constrained("min:18", default=30)
    quota: int = constrained("max:100", default=10)
    tags: list[str] = constrained("max:8", default_factory=list)
    levels: list[int] = constrained("in:1,2,3", default_factory=lambda: [1])
    note: str = ""


@pytest.fixture
def account() -> Account:
    """A fully valid Account."""
    return Account(tags=["ops", "billing"], levels=[1, 3])


@pytest.fixture
def records_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Write an importable module holding a dataclass and return its name."""
    name = "fieldcheck_sample_records"
    (tmp_path / f"{name}.py").write_text(
        textwrap.dedent(
            """
            from dataclasses import dataclass

            from fieldcheck import constrained


            @dataclass
            class User:
                name: str = constrained("between:2,10", default="")
                code: str = constrained("len:3", default="abc")
                level: int = constrained("in:1,2,3", default=1)
                tags: list[str] = constrained("max:5", default_factory=list)


            @dataclass
            class StrictUser:
                name: str = constrained("max:5", default="")

                def __post_init__(self):
                    if self.name == "bad":
                        raise ValueError("name must not be bad")


            @dataclass
            class Ledger:
                owner: str = constrained("min:1", default="")
                records: list[int] = constrained("max:10", default_factory=list)


            def not_a_record():
                return None
            """
        ),
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, name, raising=False)
    return name


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def write_file(tmp_path: Path):
    """Return a helper writing text files under tmp_path."""

    def _writer(name: str, text: str) -> Path:
        return _write(tmp_path / name, text)

    return _writer
