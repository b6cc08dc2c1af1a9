"""Tests for the create-folder and upload form actions."""

import io

import pytest
from starlette.datastructures import UploadFile

from davbrowser.exceptions import Conflict, ValidationSkip
from davbrowser.services.browser_actions import BrowserActionHandler, sanitize_name
from davbrowser.services.hooks import EventHooks
from davbrowser.tests.conftest import InMemoryTree


def _upload(data: bytes = b"hello", filename: str | None = "hello.txt") -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=filename)


@pytest.fixture
def tree(memory_tree: InMemoryTree) -> InMemoryTree:
    memory_tree.add("docs", collection=True)
    return memory_tree


@pytest.fixture
def hooks() -> EventHooks:
    return EventHooks()


@pytest.fixture
def handler(tree: InMemoryTree, hooks: EventHooks) -> BrowserActionHandler:
    return BrowserActionHandler(tree, hooks)


class TestSanitizeName:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("report", "report"),
            ("  sub/dir  ", "dir"),
            ("a/b/c/", "c"),
            ("/etc/passwd", "passwd"),
            ("../../escape", "escape"),
            ("with space", "with space"),
        ],
    )
    def test_keeps_last_segment(self, raw: str, expected: str) -> None:
        assert sanitize_name(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "/", "a/..", "..", ".", 42])
    def test_unusable_names_are_skipped(self, raw) -> None:
        with pytest.raises(ValidationSkip):
            sanitize_name(raw)


class TestMkcol:
    def test_creates_folder_from_last_segment(self, handler: BrowserActionHandler, tree: InMemoryTree) -> None:
        assert handler.handle("docs", "mkcol", {"sabreAction": "mkcol", "name": "  sub/dir  "}) is True
        assert tree.created_dirs == ["docs/dir"]

    def test_creates_folder_in_root(self, handler: BrowserActionHandler, tree: InMemoryTree) -> None:
        handler.handle("", "mkcol", {"name": "new"})
        assert tree.created_dirs == ["new"]

    @pytest.mark.parametrize("fields", [{}, {"name": ""}, {"name": "   "}])
    def test_blank_name_is_a_no_op(self, handler: BrowserActionHandler, tree: InMemoryTree, fields) -> None:
        assert handler.handle("docs", "mkcol", fields) is False
        assert tree.created_dirs == []

    def test_tree_errors_are_a_no_op(self, handler: BrowserActionHandler, tree: InMemoryTree, monkeypatch) -> None:
        def refuse(path: str) -> None:
            raise Conflict("exists")

        monkeypatch.setattr(tree, "create_directory", refuse)
        assert handler.handle("docs", "mkcol", {"name": "x"}) is False


class TestPut:
    def test_uploads_under_original_filename(self, handler: BrowserActionHandler, tree: InMemoryTree) -> None:
        assert handler.handle("docs", "put", {"sabreAction": "put", "file": _upload(b"abc")}) is True
        assert tree.created_files == {"docs/hello.txt": b"abc"}

    def test_name_field_overrides_filename(self, handler: BrowserActionHandler, tree: InMemoryTree) -> None:
        handler.handle("docs", "put", {"name": " ../renamed.txt ", "file": _upload()})
        assert list(tree.created_files) == ["docs/renamed.txt"]

    def test_blank_override_falls_back_to_filename(self, handler: BrowserActionHandler, tree: InMemoryTree) -> None:
        handler.handle("docs", "put", {"name": "  ", "file": _upload()})
        assert list(tree.created_files) == ["docs/hello.txt"]

    def test_filename_is_reduced_to_basename(self, handler: BrowserActionHandler, tree: InMemoryTree) -> None:
        handler.handle("docs", "put", {"file": _upload(filename="C:/Users/me/../evil/x.bin")})
        assert list(tree.created_files) == ["docs/x.bin"]

    def test_spoofed_upload_is_rejected(self, handler: BrowserActionHandler, tree: InMemoryTree) -> None:
        assert handler.handle("docs", "put", {"name": "x", "file": "/etc/passwd"}) is False
        assert tree.created_files == {}

    def test_missing_filename_is_a_no_op(self, handler: BrowserActionHandler, tree: InMemoryTree) -> None:
        assert handler.handle("docs", "put", {"file": _upload(filename=None)}) is False
        assert tree.created_files == {}


class TestDispatch:
    def test_unknown_action_is_a_no_op(self, handler: BrowserActionHandler, tree: InMemoryTree) -> None:
        assert handler.handle("docs", "delete", {"name": "x"}) is False
        assert tree.created_dirs == []

    def test_veto_skips_action(self, handler: BrowserActionHandler, tree: InMemoryTree, hooks: EventHooks) -> None:
        hooks.on_before_action(lambda path, action, fields: False)
        assert handler.handle("docs", "mkcol", {"name": "x"}) is False
        assert tree.created_dirs == []

    def test_hook_sees_path_action_and_fields(self, handler: BrowserActionHandler, hooks: EventHooks) -> None:
        seen = []
        hooks.on_before_action(lambda *args: seen.append(args))
        fields = {"sabreAction": "mkcol", "name": "x"}
        handler.handle("docs", "mkcol", fields)
        assert seen == [("docs", "mkcol", fields)]
