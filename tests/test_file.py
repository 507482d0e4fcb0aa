import pytest
from pathlib import Path
from smartcontext.file import (
    clear_ignore_caches,
    get_all_text_files,
    is_extraneous_file,
    is_ignored,
    is_text_file,
    read_file_contents,
)


@pytest.fixture(autouse=True)
def fresh_caches():
    clear_ignore_caches()
    yield
    clear_ignore_caches()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Creates a mock project structure for testing ignore patterns."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()

    # Root .gitignore
    (project_dir / ".gitignore").write_text("*.log\nnode_modules/\n")
    (project_dir / "file.log").touch()
    (project_dir / "main.js").touch()
    (project_dir / "node_modules").mkdir()
    (project_dir / "node_modules" / "some_lib.js").touch()

    # Subdirectory with its own .scignore
    sub_dir = project_dir / "src"
    sub_dir.mkdir()
    (sub_dir / ".scignore").write_text("*.tmp\ngenerated/\n")
    (sub_dir / "component.js").touch()
    (sub_dir / "component.tmp").touch()
    (sub_dir / "generated").mkdir()
    (sub_dir / "generated" / "out.js").touch()

    # Nested subdirectory to test cascading
    nested_dir = sub_dir / "api"
    nested_dir.mkdir()
    (nested_dir / "endpoint.ts").touch()
    (nested_dir / "endpoint.log").touch()  # Should be ignored by root .gitignore
    (nested_dir / "endpoint.tmp").touch()  # Should be ignored by src/.scignore

    return project_dir


def test_is_ignored_with_nested_ignore_files(project_root: Path):
    """
    Tests that is_ignored respects .gitignore and .scignore files from the
    current directory up to the project root.
    """
    test_cases = [
        ("file.log", True),
        ("main.js", False),
        ("node_modules/some_lib.js", True),
        ("node_modules", True),
        ("src/component.js", False),
        ("src/component.tmp", True),
        ("src/generated/out.js", True),
        ("src/generated", True),
        ("src/api/endpoint.ts", False),
        ("src/api/endpoint.log", True),
        ("src/api/endpoint.tmp", True),
    ]

    for rel_path, expected in test_cases:
        full_path = project_root / rel_path
        assert is_ignored(str(full_path), [], str(project_root)) == expected, (
            f"Failed on path: {rel_path}"
        )


def test_is_ignored_anchored_path_pattern(tmp_path: Path):
    (tmp_path / "src" / "gen").mkdir(parents=True)
    (tmp_path / "src" / "gen" / "a.js").touch()
    (tmp_path / "lib" / "src" / "gen").mkdir(parents=True)
    (tmp_path / "lib" / "src" / "gen" / "b.js").touch()

    patterns = ["/src/gen"]
    assert is_ignored(str(tmp_path / "src" / "gen" / "a.js"), patterns, str(tmp_path))
    assert not is_ignored(
        str(tmp_path / "lib" / "src" / "gen" / "b.js"), patterns, str(tmp_path)
    )


def test_is_text_file():
    assert is_text_file("src/app.ts")
    assert is_text_file("README.MD")
    assert not is_text_file("logo.png")
    assert not is_text_file("Makefile")


def test_is_extraneous_file():
    assert is_extraneous_file(".gitignore")
    assert is_extraneous_file("sub/.scignore")
    assert is_extraneous_file(".DS_Store")
    assert is_extraneous_file(".git/config")
    assert not is_extraneous_file("src/git.js")
    assert not is_extraneous_file(".github/workflows/ci.yml")


def test_get_all_text_files(project_root: Path):
    (project_root / "logo.png").write_bytes(b"\x89PNG")
    (project_root / ".git").mkdir()
    (project_root / ".git" / "HEAD.txt").write_text("ref")

    files = get_all_text_files(str(project_root), [])
    relative = [Path(f).relative_to(project_root).as_posix() for f in files]

    assert relative == ["main.js", "src/api/endpoint.ts", "src/component.js"]


def test_read_file_contents_missing_file(tmp_path: Path):
    assert read_file_contents(str(tmp_path / "nope.js")) == ""


def test_read_file_contents_replaces_undecodable_bytes(tmp_path: Path):
    target = tmp_path / "latin.txt"
    target.write_bytes(b"caf\xe9")
    assert read_file_contents(str(target)).startswith("caf")
