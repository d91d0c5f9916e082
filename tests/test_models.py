"""Tests for catalog and download models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from addgitignore.models import (
    CatalogEntry,
    DownloadOperation,
    RepositoryItem,
    WriteMode,
)


class TestRepositoryItem:
    """Tests for RepositoryItem."""

    def test_from_api_payload(self):
        item = RepositoryItem.model_validate(
            {
                "name": "Python.gitignore",
                "path": "Python.gitignore",
                "sha": "abc",
                "size": 3000,
                "type": "file",
                "download_url": "https://raw/Python.gitignore",
                "_links": {"self": "https://api/..."},
            }
        )
        assert item.name == "Python.gitignore"
        assert item.is_template is True

    def test_directory_has_no_download_url(self):
        item = RepositoryItem(name="Global", path="Global", type="dir")
        assert item.download_url is None
        assert item.is_template is False

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            RepositoryItem.model_validate({"name": "x", "type": "file"})


class TestCatalogEntry:
    """Tests for CatalogEntry."""

    def test_from_item(self):
        item = RepositoryItem(
            name="Python.gitignore",
            path="Python.gitignore",
            type="file",
            download_url="https://raw/Python.gitignore",
        )
        entry = CatalogEntry.from_item(item)

        assert entry.label == "Python"
        assert entry.description == "Python.gitignore"
        assert entry.url == "https://raw/Python.gitignore"
        assert str(entry) == "Python"

    def test_empty_label_rejected(self):
        with pytest.raises(ValidationError):
            CatalogEntry(label="", description="x", url="https://raw/x")

    def test_immutable(self):
        entry = CatalogEntry(label="Go", description="Go.gitignore", url="https://raw/Go")
        with pytest.raises(ValidationError):
            entry.label = "Rust"

    def test_equality_by_value(self):
        a = CatalogEntry(label="Go", description="Go.gitignore", url="https://raw/Go")
        b = CatalogEntry(label="Go", description="Go.gitignore", url="https://raw/Go")
        assert a == b
        assert hash(a) == hash(b)


class TestWriteMode:
    """Tests for WriteMode enum."""

    def test_values(self):
        assert WriteMode.APPEND.value == "append"
        assert WriteMode.OVERWRITE.value == "overwrite"

    def test_from_string(self):
        assert WriteMode("append") is WriteMode.APPEND


class TestDownloadOperation:
    """Tests for DownloadOperation."""

    @pytest.fixture
    def entry(self):
        return CatalogEntry(
            label="macOS",
            description="Global/macOS.gitignore",
            url="https://raw/Global/macOS.gitignore",
        )

    def test_fields(self, entry):
        op = DownloadOperation(
            mode=WriteMode.APPEND, target_path=Path("/proj/.gitignore"), entry=entry
        )
        assert op.mode is WriteMode.APPEND
        assert op.target_path == Path("/proj/.gitignore")
        assert op.entry is entry

    def test_path_coerced(self, entry):
        op = DownloadOperation(mode="overwrite", target_path="/proj/.gitignore", entry=entry)
        assert op.mode is WriteMode.OVERWRITE
        assert isinstance(op.target_path, Path)

    def test_immutable(self, entry):
        op = DownloadOperation(mode=WriteMode.APPEND, target_path=Path("/p"), entry=entry)
        with pytest.raises(ValidationError):
            op.mode = WriteMode.OVERWRITE

    def test_append_message(self, entry):
        op = DownloadOperation(mode=WriteMode.APPEND, target_path=Path("/p"), entry=entry)
        assert op.success_message() == (
            "Appended Global/macOS.gitignore to the existing .gitignore in the project root"
        )

    def test_overwrite_message(self, entry):
        op = DownloadOperation(mode=WriteMode.OVERWRITE, target_path=Path("/p"), entry=entry)
        assert op.success_message() == (
            "Created .gitignore file in the project root based on Global/macOS.gitignore"
        )
