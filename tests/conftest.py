import itertools
import uuid
from pathlib import Path

import pytest


@pytest.fixture
def chapters_dir(tmp_path: Path) -> Path:
    """Three chapters named out of lexical order plus a non-numbered note."""
    folder = tmp_path / "book"
    folder.mkdir()
    (folder / "10.md").write_text("# Ten\nLast chapter.\n", encoding="utf-8")
    (folder / "2.md").write_text("# Two\nSecond.\n", encoding="utf-8")
    (folder / "1.md").write_text("# Intro\nHello world\n", encoding="utf-8")
    (folder / "2.1.md").write_text("## [Two point one]\n### Sub\n\nBody\n", encoding="utf-8")
    (folder / "appendix.md").write_text("# Appendix\nExtra\n", encoding="utf-8")
    return folder


@pytest.fixture
def cover_image(tmp_path: Path) -> Path:
    path = tmp_path / "cover.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg\xff\xd9")
    return path


@pytest.fixture
def fixed_uuids():
    """Returns a factory yielding predictable UUID4 values."""
    counter = itertools.count(1)

    def factory() -> uuid.UUID:
        return uuid.UUID(int=next(counter), version=4)

    return factory
