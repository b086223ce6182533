from pathlib import Path

from registrar.scope import resolve_scope


def touch(path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")


def test_scope_is_first_directory_holding_a_file(tmp_path):
    touch(tmp_path / "src" / "myapp" / "__init__.py")
    touch(tmp_path / "src" / "myapp" / "widgets" / "__init__.py")

    assert resolve_scope(tmp_path) == "myapp"


def test_nested_directories_become_dotted_scope(tmp_path):
    touch(tmp_path / "src" / "org" / "example" / "app" / "core.py")

    assert resolve_scope(tmp_path) == "org.example.app"


def test_path_without_source_root_is_used_as_is(tmp_path):
    touch(tmp_path / "lib" / "myapp" / "core.py")

    assert resolve_scope(tmp_path) == "lib.myapp"


def test_multi_part_source_root_is_stripped(tmp_path):
    touch(tmp_path / "src" / "main" / "python" / "org" / "app" / "core.py")

    assert resolve_scope(tmp_path, ["src", "src/main/python"]) == "org.app"


def test_first_file_wins_in_sorted_depth_first_order(tmp_path):
    touch(tmp_path / "src" / "beta" / "b.py")
    touch(tmp_path / "src" / "alpha" / "deeper" / "a.py")

    assert resolve_scope(tmp_path) == "alpha.deeper"


def test_hidden_entries_and_caches_are_ignored(tmp_path):
    touch(tmp_path / "src" / ".hidden" / "x.py")
    touch(tmp_path / "src" / "__pycache__" / "x.pyc")
    touch(tmp_path / "src" / "myapp" / "core.py")

    assert resolve_scope(tmp_path) == "myapp"


def test_empty_tree_has_no_scope(tmp_path):
    (tmp_path / "src" / "empty").mkdir(parents=True)

    assert resolve_scope(tmp_path) is None


def test_missing_directory_has_no_scope(tmp_path):
    assert resolve_scope(tmp_path / "does-not-exist") is None


def test_file_directly_in_source_root_has_no_scope(tmp_path):
    touch(tmp_path / "src" / "module.py")
    touch(tmp_path / "src" / "myapp" / "core.py")

    assert resolve_scope(tmp_path) is None
