from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from office_manager.core.enums import FileCategory
from office_manager.core.exceptions import NotFoundError, UnsupportedTypeError, ValidationError
from office_manager.files.model import FileMetadata, IncomingFile
from office_manager.files.service import FileService
from office_manager.users.model import SignUpForm


@pytest.fixture
def owner_id(container) -> int:
    form = SignUpForm(full_name="A", organization_name="Org", email="a@x.com", phone_no="1", password="secret1")
    return container.auth_service.sign_up(form).user.user_id


def _incoming(name="report.pdf", mimetype="application/pdf", data=b"%PDF-1.4 hello") -> IncomingFile:
    return IncomingFile(filename=name, mimetype=mimetype, stream=io.BytesIO(data))


def _upload(svc, owner_id, *, category=None, description=None, tags=None, **incoming):
    return svc.upload(
        user_id=owner_id,
        incoming=_incoming(**incoming),
        metadata=FileMetadata(file_category=category, description=description, tags=tags),
    )


def _blobs(storage) -> list[Path]:
    return sorted(p for p in storage.root.iterdir() if p.is_file())


def test_upload_stores_blob_and_row(container, storage, owner_id):
    svc = container.file_service

    file_id = _upload(svc, owner_id, data=b"abc", description="Q4 numbers")
    record = svc.get(file_id)

    assert record.original_file_name == "report.pdf"
    assert record.file_name.endswith("-report.pdf")
    assert record.file_size == 3
    assert record.file_type == "application/pdf"
    assert record.file_category == FileCategory.DOCUMENT
    assert Path(record.file_path).read_bytes() == b"abc"
    assert _blobs(storage) == [Path(record.file_path)]
    assert "filePath" not in record.to_dict()


def test_upload_sanitizes_stored_name(container, owner_id):
    file_id = _upload(container.file_service, owner_id, name="../../etc/my report.pdf")
    record = container.file_service.get(file_id)

    assert "/" not in record.file_name
    assert record.file_name.endswith("-etc_my_report.pdf")
    assert record.original_file_name == "../../etc/my report.pdf"


def test_upload_rejects_type_before_storage(container, storage, owner_id):
    with pytest.raises(UnsupportedTypeError, match="not allowed") as exc:
        _upload(container.file_service, owner_id, name="run.exe", mimetype="application/x-msdownload")

    assert exc.value.status_code == 400
    assert _blobs(storage) == []


def test_upload_rejects_oversized_before_storage(store, storage, owner_id, container):
    svc = FileService(container.files_repo, storage, max_bytes=4)

    with pytest.raises(ValidationError, match="File too large"):
        _upload(svc, owner_id, data=b"12345")

    assert _blobs(storage) == []
    assert store.files == {}


def test_upload_at_limit_is_accepted(container, storage, owner_id):
    svc = FileService(container.files_repo, storage, max_bytes=5)

    assert _upload(svc, owner_id, data=b"12345")


def test_upload_requires_owner_and_file(container, owner_id):
    with pytest.raises(ValidationError, match="userId and file are required"):
        container.file_service.upload(user_id=None, incoming=_incoming(), metadata=FileMetadata())
    with pytest.raises(ValidationError, match="userId and file are required"):
        container.file_service.upload(user_id=owner_id, incoming=None, metadata=FileMetadata())


def test_upload_removes_blob_when_insert_fails(container, storage, owner_id):
    container.files_repo.fail_next_create = True

    with pytest.raises(RuntimeError):
        _upload(container.file_service, owner_id)

    assert _blobs(storage) == []


def test_upload_for_unknown_owner_leaves_no_blob(container, storage):
    with pytest.raises(ValidationError, match="User does not exist"):
        _upload(container.file_service, 999)

    assert _blobs(storage) == []


def test_list_filters_by_category_and_search(container, owner_id):
    svc = container.file_service
    note = _upload(svc, owner_id, name="notes.txt", mimetype="text/plain", category="Note", tags="meeting")
    sheet = _upload(svc, owner_id, name="budget.csv", mimetype="text/csv", category="Data", description="Q4 Budget")
    doc = _upload(svc, owner_id, name="contract.pdf")

    assert [f.file_id for f in svc.list_files(owner_id)] == [doc, sheet, note]
    assert [f.file_id for f in svc.list_files(owner_id, category="All")] == [doc, sheet, note]
    assert [f.file_id for f in svc.list_files(owner_id, category="Data")] == [sheet]
    assert [f.file_id for f in svc.list_files(owner_id, search="budget")] == [sheet]
    assert [f.file_id for f in svc.list_files(owner_id, search="MEETING")] == [note]
    assert [f.file_id for f in svc.list_files(owner_id, search="contract", category="Note")] == []
    assert svc.list_files(owner_id, search="   ") == svc.list_files(owner_id)


def test_list_rejects_unknown_category(container, owner_id):
    with pytest.raises(ValidationError, match="fileCategory"):
        container.file_service.list_files(owner_id, category="Photos")


def test_stats_totals_match_category_sums(container, owner_id):
    svc = container.file_service
    _upload(svc, owner_id, data=b"a" * 10, category="Report")
    _upload(svc, owner_id, data=b"b" * 5, category="Report")
    _upload(svc, owner_id, data=b"c" * 7, category="Note")

    stats = svc.stats(owner_id)

    assert stats.total_files == 3
    assert stats.total_size == 22
    by = {c.category: (c.count, c.size) for c in stats.by_category}
    assert by == {FileCategory.NOTE: (1, 7), FileCategory.REPORT: (2, 15)}


def test_stats_for_empty_owner(container, owner_id):
    assert container.file_service.stats(owner_id).to_dict() == {"totalFiles": 0, "totalSize": 0, "byCategory": []}


def test_update_metadata_replaces_fields(container, owner_id):
    svc = container.file_service
    file_id = _upload(svc, owner_id, category="Note", description="old", tags="x")
    before = svc.get(file_id)

    svc.update_metadata(file_id, FileMetadata(file_category="Report", description="new"))
    after = svc.get(file_id)

    assert after.file_category == FileCategory.REPORT
    assert after.description == "new"
    assert after.tags is None
    assert after.updated_date > before.updated_date
    assert after.file_name == before.file_name


def test_update_metadata_unknown_file(container):
    with pytest.raises(NotFoundError, match="File not found"):
        container.file_service.update_metadata(404, FileMetadata(description="x"))


def test_resolve_download_requires_blob(container, owner_id):
    svc = container.file_service
    file_id = _upload(svc, owner_id)
    assert svc.resolve_download(file_id).file_id == file_id

    Path(svc.get(file_id).file_path).unlink()

    with pytest.raises(NotFoundError, match="File missing from storage"):
        svc.resolve_download(file_id)


def test_delete_removes_blob_then_row(container, storage, store, owner_id):
    svc = container.file_service
    file_id = _upload(svc, owner_id)

    svc.delete(file_id)

    assert file_id not in store.files
    assert _blobs(storage) == []
    with pytest.raises(NotFoundError):
        svc.delete(file_id)


def test_delete_with_missing_blob_still_deletes_row(container, store, owner_id, caplog):
    svc = container.file_service
    file_id = _upload(svc, owner_id)
    Path(svc.get(file_id).file_path).unlink()

    with caplog.at_level(logging.WARNING):
        svc.delete(file_id)

    assert file_id not in store.files
    assert "Could not delete stored file" in caplog.text
