"""Tests for new day / new part scaffolding."""

from pathlib import Path

import pytest

from aocli.config import FormatsConfig
from aocli.context import ContextResolver, InvalidContextError
from aocli.scaffold import (
    AlreadyExistsError,
    NoPreviousPartError,
    new_day,
    new_part,
    next_day,
)

FORMATS = FormatsConfig(repo="repo-{year}", day="day-{day}", part="part-{part}.ext")


@pytest.fixture
def resolver() -> ContextResolver:
    return ContextResolver(FORMATS)


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    path = tmp_path / "repo-2023"
    path.mkdir()
    return path


class TestNewDay:
    """Tests for new_day() and next_day()."""

    def test_creates_day_and_first_part(self, resolver, repo_dir: Path) -> None:
        """Test the day directory and part 1 file are created."""
        repo = resolver.locate_repo(repo_dir)
        created = new_day(resolver, repo, 7, b"template\n")

        day_dir = repo_dir.resolve() / "day-7"
        assert created == [day_dir, day_dir / "part-1.ext"]
        assert (day_dir / "part-1.ext").read_bytes() == b"template\n"

    def test_second_call_fails_and_leaves_files(self, resolver, repo_dir: Path) -> None:
        """Test new_day twice raises AlreadyExists without touching files."""
        repo = resolver.locate_repo(repo_dir)
        new_day(resolver, repo, 7, b"original")
        part_file = repo_dir / "day-7" / "part-1.ext"
        part_file.write_bytes(b"edited by user")

        with pytest.raises(AlreadyExistsError) as exc_info:
            new_day(resolver, repo, 7, b"original")

        assert exc_info.value.path.name == "day-7"
        assert part_file.read_bytes() == b"edited by user"
        assert sorted(p.name for p in (repo_dir / "day-7").iterdir()) == ["part-1.ext"]

    def test_existing_day_under_other_name_fails(self, resolver, repo_dir: Path) -> None:
        """Test a day dir matching the template under another name blocks new_day."""
        (repo_dir / "day-07").mkdir()
        (repo_dir / "day-07" / "part-1.ext").write_bytes(b"solved")
        repo = resolver.locate_repo(repo_dir)

        with pytest.raises(AlreadyExistsError) as exc_info:
            new_day(resolver, repo, 7)

        assert exc_info.value.path.name == "day-07"
        assert not (repo_dir / "day-7").exists()
        assert (repo_dir / "day-07" / "part-1.ext").read_bytes() == b"solved"

    def test_padded_day_template(self, repo_dir: Path) -> None:
        """Test the day directory follows the padding directive."""
        resolver = ContextResolver(
            FormatsConfig(repo="repo-{year}", day="day-{day:02}", part="part-{part}.ext")
        )
        repo = resolver.locate_repo(repo_dir)
        created = new_day(resolver, repo, 3)
        assert created[0].name == "day-03"
        assert created[1].read_bytes() == b""

    def test_next_day_follows_latest(self, resolver, repo_dir: Path) -> None:
        """Test next_day is one past the highest existing day."""
        repo = resolver.locate_repo(repo_dir)
        assert next_day(resolver, repo) == 1
        (repo_dir / "day-1").mkdir()
        (repo_dir / "day-4").mkdir()
        (repo_dir / "notes").mkdir()
        assert next_day(resolver, repo) == 5

    def test_next_day_after_last_day_raises(self, resolver, repo_dir: Path) -> None:
        """Test there is no day after 25."""
        (repo_dir / "day-25").mkdir()
        repo = resolver.locate_repo(repo_dir)
        with pytest.raises(InvalidContextError):
            next_day(resolver, repo)

    def test_invalid_day_raises(self, resolver, repo_dir: Path) -> None:
        """Test day 26 is rejected."""
        repo = resolver.locate_repo(repo_dir)
        with pytest.raises(InvalidContextError):
            new_day(resolver, repo, 26)


class TestNewPart:
    """Tests for new_part()."""

    def test_copies_part_one_verbatim(self, resolver, repo_dir: Path) -> None:
        """Test part 2 gets identical bytes to part 1."""
        day_dir = repo_dir / "day-7"
        day_dir.mkdir()
        content = b"fn main() {\r\n    println!(\"{}\", 1);\r\n}\n\x00"
        (day_dir / "part-1.ext").write_bytes(content)

        created = new_part(resolver, resolver.locate_day(day_dir))

        assert created.name == "part-2.ext"
        assert created.read_bytes() == content

    def test_second_call_raises_already_exists(self, resolver, repo_dir: Path) -> None:
        """Test part 2 is never overwritten."""
        day_dir = repo_dir / "day-7"
        day_dir.mkdir()
        (day_dir / "part-1.ext").write_bytes(b"one")
        day = resolver.locate_day(day_dir)
        new_part(resolver, day)
        (day_dir / "part-2.ext").write_bytes(b"two")

        with pytest.raises(AlreadyExistsError) as exc_info:
            new_part(resolver, day)

        assert exc_info.value.path.name == "part-2.ext"
        assert (day_dir / "part-2.ext").read_bytes() == b"two"

    def test_without_part_one_raises(self, resolver, repo_dir: Path) -> None:
        """Test NoPreviousPartError names the missing part 1 path."""
        day_dir = repo_dir / "day-7"
        day_dir.mkdir()

        with pytest.raises(NoPreviousPartError) as exc_info:
            new_part(resolver, resolver.locate_day(day_dir))

        assert exc_info.value.path.name == "part-1.ext"
        assert list(day_dir.iterdir()) == []
