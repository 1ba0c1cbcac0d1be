import pytest

from repovector.services.file_classifier import (
    classify_content,
    classify_directory,
    contains_binary_data,
    should_skip,
)


@pytest.mark.parametrize("rel_path", [".git/config", ".gitignore", "node_modules/.git/HEAD"])
def test_version_control_and_hidden_paths_rejected(rel_path):
    assert should_skip(rel_path, is_dir=False).include is False


@pytest.mark.parametrize("rel_path", ["main.go", "README.md", "src/handlers/user.go"])
def test_source_files_accepted(rel_path):
    assert should_skip(rel_path, is_dir=False, content=b"package main\n").include is True


@pytest.mark.parametrize(
    "rel_path", ["photo.png", "assets/Logo.PNG", "docs/spec.PDF", "lib/libfoo.so", "dist.tar.gz"]
)
def test_binary_extensions_rejected_case_insensitively(rel_path):
    decision = should_skip(rel_path, is_dir=False)
    assert decision.include is False
    assert decision.reason == "binary"


def test_lock_and_index_markers_rejected():
    assert should_skip("sub/index.lock", is_dir=False).reason == "vcs"
    assert should_skip("DIRC", is_dir=False).reason == "vcs"


def test_git_directory_is_pruned():
    decision = classify_directory(".git")
    assert decision.include is False
    assert decision.prune is True


@pytest.mark.parametrize("name", [".github", ".gitlab", ".hg", ".svn"])
def test_vcs_like_directories_are_pruned(name):
    decision = should_skip(f"pkg/{name}", is_dir=True)
    assert decision.reason == "vcs"
    assert decision.prune is True


def test_other_hidden_directory_skipped_without_prune():
    decision = should_skip("config/.vscode", is_dir=True)
    assert decision.include is False
    assert decision.reason == "hidden"
    assert decision.prune is False


def test_regular_directory_included():
    assert classify_directory("handlers").include is True


def test_oversized_file_rejected():
    decision = classify_content(b"a" * 100_001)
    assert decision.include is False
    assert decision.reason == "too_large"


def test_file_at_size_ceiling_accepted():
    assert classify_content(b"a" * 100_000).include is True


def test_large_ascii_file_accepted():
    content = b"print('hello')\n" * (50_000 // 15)
    assert classify_content(content).include is True


def test_nul_byte_in_head_is_binary():
    assert classify_content(b"abc\x00def").reason == "binary_content"


def test_non_ascii_in_head_is_binary():
    # Known limitation: UTF-8 text with accents is treated as binary.
    assert contains_binary_data("café".encode("utf-8")) is True


def test_binary_bytes_after_sniff_window_are_ignored():
    content = b"a" * 1000 + b"\x00\xff"
    assert contains_binary_data(content) is False


def test_content_not_consulted_when_path_rejected():
    decision = should_skip(".env", is_dir=False, content=b"SECRET=1")
    assert decision.reason == "hidden"
