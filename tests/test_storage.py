import asyncio
import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.core.exceptions import ValidationFailed
from app.services.storage import BlobStore

from tests.helpers import PNG_BYTES


def _upload(filename="photo.png", content_type="image/png", data=PNG_BYTES):
    return UploadFile(file=io.BytesIO(data), filename=filename, headers=Headers({"content-type": content_type}))


def test_save_returns_public_relative_path(blob_store):
    path = asyncio.run(blob_store.save("events", _upload(), prefix="event"))

    assert path.startswith("/uploads/events/event-")
    assert path.endswith(".png")
    assert blob_store.exists(path)


def test_delete_removes_file(blob_store):
    path = asyncio.run(blob_store.save("events", _upload(), prefix="event"))
    blob_store.delete(path)
    assert not blob_store.exists(path)


@pytest.mark.parametrize(
    "filename, content_type",
    [
        ("notes.pdf", "application/pdf"),
        ("photo.png", "text/plain"),
        ("script.exe", "image/png"),
    ],
)
def test_rejects_non_images(blob_store, filename, content_type):
    with pytest.raises(ValidationFailed):
        asyncio.run(blob_store.save("events", _upload(filename, content_type), prefix="event"))


def test_rejects_oversized_files(tmp_path):
    store = BlobStore(tmp_path, max_size=10)
    with pytest.raises(ValidationFailed):
        asyncio.run(store.save("events", _upload(), prefix="event"))
    assert not (tmp_path / "events").exists() or not any((tmp_path / "events").iterdir())


def test_save_many_cleans_up_on_failure(blob_store):
    uploads = [_upload("a.png"), _upload("b.jpg", "image/jpeg"), _upload("c.txt", "text/plain")]
    with pytest.raises(ValidationFailed):
        asyncio.run(blob_store.save_many("testimonies", uploads, prefix="testimony"))
    assert not any((blob_store.root / "testimonies").iterdir())


def test_paths_outside_root_are_ignored(blob_store, tmp_path):
    outside = tmp_path / "keep.txt"
    outside.write_text("keep")
    blob_store.delete_many(["/uploads/../keep.txt", "/etc/passwd", ""])
    assert outside.exists()
