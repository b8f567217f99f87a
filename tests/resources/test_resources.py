"""Tests for filesystem resources and locator serialization."""
import os

import pytest

from pathmap.core.validators import ValidationError
from pathmap.exceptions import ResourceNotFoundError
from pathmap.repository import PathMappingRepository
from pathmap.resources import (
    Attachment,
    DirectoryResource,
    FileResource,
    GenericResource,
    ResourceKind,
    create_resource,
    serialize_resource,
)


class TestResourceKind:
    """Tests for ResourceKind.for_locator()."""

    def test_none_is_generic(self):
        assert ResourceKind.for_locator(None) == ResourceKind.GENERIC

    def test_directory(self, css_dir):
        assert ResourceKind.for_locator(str(css_dir)) == ResourceKind.DIRECTORY

    def test_file(self, css_dir):
        assert ResourceKind.for_locator(str(css_dir / "style.css")) == ResourceKind.FILE

    def test_missing_target_is_generic(self, temp_dir):
        assert ResourceKind.for_locator(str(temp_dir / "gone")) == ResourceKind.GENERIC

    def test_empty_locator_is_generic(self):
        assert ResourceKind.for_locator("") == ResourceKind.GENERIC


class TestDirectoryResource:
    """Tests for DirectoryResource."""

    def test_create(self, css_dir):
        resource = DirectoryResource(str(css_dir))
        assert resource.filesystem_path == str(css_dir)
        assert resource.kind == ResourceKind.DIRECTORY
        assert resource.name == "css"
        assert resource.path is None
        assert not resource.is_attached

    def test_relative_path_is_made_absolute(self, css_dir, monkeypatch):
        monkeypatch.chdir(css_dir.parent)
        resource = DirectoryResource("css")
        assert resource.filesystem_path == os.path.abspath("css")

    def test_not_a_directory(self, css_dir):
        with pytest.raises(ValidationError, match="is not a directory"):
            DirectoryResource(str(css_dir / "style.css"))

    def test_missing_directory(self, temp_dir):
        with pytest.raises(ValidationError):
            DirectoryResource(str(temp_dir / "missing"))

    def test_native_children_sorted_by_name(self, css_dir):
        children = DirectoryResource(str(css_dir)).list_children()

        assert children.get_names() == ["icons", "reset.css", "style.css"]
        assert isinstance(children[0], DirectoryResource)
        assert isinstance(children[1], FileResource)
        assert not any(child.is_attached for child in children)

    def test_has_children(self, css_dir, temp_dir):
        empty = temp_dir / "empty"
        empty.mkdir()

        assert DirectoryResource(str(css_dir)).has_children()
        assert not DirectoryResource(str(empty)).has_children()

    def test_native_get_child(self, css_dir):
        resource = DirectoryResource(str(css_dir))

        assert resource.get_child("style.css").filesystem_path == str(css_dir / "style.css")
        assert resource.has_child("icons")
        assert not resource.has_child("missing.css")

        with pytest.raises(ResourceNotFoundError):
            resource.get_child("missing.css")


class TestFileResource:
    """Tests for FileResource."""

    def test_create(self, css_dir):
        path = css_dir / "style.css"
        resource = FileResource(str(path))

        assert resource.name == "style.css"
        assert resource.kind == ResourceKind.FILE
        assert resource.body == b"body { color: black; }"
        assert resource.size == path.stat().st_size
        assert resource.last_modified == path.stat().st_mtime

    def test_not_a_file(self, css_dir):
        with pytest.raises(ValidationError, match="is not a file"):
            FileResource(str(css_dir))

    def test_no_children(self, css_dir):
        resource = FileResource(str(css_dir / "style.css"))
        assert len(resource.list_children()) == 0
        assert not resource.has_children()


class TestGenericResource:
    """Tests for GenericResource."""

    def test_virtual_resource(self):
        resource = GenericResource()
        assert resource.filesystem_path is None
        assert resource.name is None
        assert resource.kind == ResourceKind.GENERIC
        assert len(resource.list_children()) == 0
        assert not resource.has_children()

    def test_keeps_locator(self):
        resource = GenericResource("/vanished/file.css")
        assert resource.filesystem_path == "/vanished/file.css"
        assert resource.name == "file.css"


class TestAttachment:
    """Tests for the attachment lifecycle."""

    def test_attach_to(self, repo):
        resource = GenericResource()
        resource.attach_to(repo, "/virtual/dir")

        assert resource.is_attached
        assert resource.attachment == Attachment(repository=repo, path="/virtual/dir")
        assert resource.repository is repo
        assert resource.path == "/virtual/dir"
        assert resource.name == "dir"

    def test_attached_name_comes_from_virtual_path(self, css_dir, repo):
        resource = DirectoryResource(str(css_dir))
        resource.attach_to(repo, "/styles")
        assert resource.name == "styles"

    def test_root_has_empty_name(self, repo):
        assert repo.get("/").name == ""

    def test_detach(self, repo):
        resource = GenericResource()
        resource.attach_to(repo, "/a")
        resource.detach()
        assert not resource.is_attached
        assert resource.path is None

    def test_detach_ignores_other_repository(self, repo):
        other = PathMappingRepository()
        resource = GenericResource()
        resource.attach_to(repo, "/a")

        resource.detach(other)
        assert resource.repository is repo

        resource.detach(repo)
        assert not resource.is_attached

    def test_detach_when_detached(self):
        resource = GenericResource()
        resource.detach()
        assert not resource.is_attached

    def test_copy_is_detached(self, css_dir, repo):
        resource = DirectoryResource(str(css_dir))
        resource.attach_to(repo, "/css")

        duplicate = resource.copy()

        assert duplicate is not resource
        assert isinstance(duplicate, DirectoryResource)
        assert duplicate.filesystem_path == resource.filesystem_path
        assert not duplicate.is_attached
        assert resource.path == "/css"

    def test_attached_children_come_from_repository(self, css_dir, repo):
        repo.add("/css", DirectoryResource(str(css_dir)))
        repo.add("/css/extra", GenericResource())
        resource = repo.get("/css")

        assert resource.list_children().get_names() == ["extra", "icons", "reset.css", "style.css"]
        assert resource.has_children()
        assert resource.get_child("extra").path == "/css/extra"
        assert resource.has_child("icons")
        assert not resource.has_child("missing")

    def test_attached_has_child_with_wildcard_name(self, repo):
        repo.add("/a", GenericResource())
        resource = repo.get("/")

        assert resource.has_child("a")
        assert not resource.has_child("*")

    def test_repr(self, repo):
        resource = GenericResource()
        resource.attach_to(repo, "/a")
        assert repr(resource) == "GenericResource(path='/a', filesystem_path=None)"


class TestLocator:
    """Tests for serialize_resource() and create_resource()."""

    def test_serialize(self, css_dir):
        assert serialize_resource(DirectoryResource(str(css_dir))) == str(css_dir)
        assert serialize_resource(GenericResource()) is None

    def test_create_from_none(self):
        resource = create_resource(None)
        assert isinstance(resource, GenericResource)
        assert resource.filesystem_path is None

    def test_create_directory(self, css_dir):
        assert isinstance(create_resource(str(css_dir)), DirectoryResource)

    def test_create_file(self, css_dir):
        resource = create_resource(str(css_dir / "style.css"))
        assert isinstance(resource, FileResource)
        assert not resource.is_attached

    def test_vanished_target_keeps_locator(self, css_dir):
        path = css_dir / "style.css"
        locator = serialize_resource(FileResource(str(path)))
        path.unlink()

        resource = create_resource(locator)

        assert isinstance(resource, GenericResource)
        assert resource.filesystem_path == locator
