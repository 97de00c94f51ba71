import io
import threading

import pytest

from hr_service.storage import BlobStore, file_extension, make_stored_name, sanitize_filename


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("report.pdf", "report.pdf"),
        ("../../etc/passwd", "passwd"),
        ("/etc/passwd", "passwd"),
        ("..\\..\\windows\\win.ini", "win.ini"),
        ("C:\\Users\\me\\cv.docx", "cv.docx"),
        ("C:evil.txt", "evil.txt"),
        ("..", "upload"),
        ("", "upload"),
        (None, "upload"),
        ("dir/", "dir"),
    ],
)
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


@pytest.mark.parametrize(
    "name,ext",
    [("a.txt", ".txt"), ("archive.tar.gz", ".gz"), ("README", ""), (".bashrc", ".bashrc")],
)
def test_file_extension(name, ext):
    assert file_extension(name) == ext


def test_stored_name_shape():
    stored = make_stored_name("photo.JPG")
    millis, rest = stored.split("-", 1)
    assert millis.isdigit()
    assert rest.endswith(".JPG")
    assert len(rest) == 36 + len(".JPG")


def test_traversal_name_stays_inside_root(blob_store, tmp_path):
    stored = blob_store.store(io.BytesIO(b"root:x:0:0"), "../../etc/passwd")

    assert ".." not in stored
    assert "/" not in stored and "\\" not in stored
    path = blob_store.path_for(stored)
    assert path.parent == blob_store.root
    assert path.read_bytes() == b"root:x:0:0"
    assert not (tmp_path / "etc").exists()


def test_round_trip_large_stream(blob_store):
    data = bytes(range(256)) * 10000  # больше одного чанка
    stored = blob_store.store(io.BytesIO(data), "blob.bin")
    assert (blob_store.root / stored).read_bytes() == data


def test_same_original_name_gives_distinct_files(blob_store):
    results = []

    def worker(payload):
        results.append(blob_store.store(io.BytesIO(payload), "same.txt"))

    threads = [threading.Thread(target=worker, args=(f"payload-{i}".encode(),)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(set(results)) == 8
    contents = {(blob_store.root / name).read_bytes() for name in results}
    assert contents == {f"payload-{i}".encode() for i in range(8)}


def test_path_for_rejects_escape(blob_store):
    with pytest.raises(ValueError):
        blob_store.path_for("../outside.txt")


def test_ensure_root_creates_parents(tmp_path):
    store = BlobStore(tmp_path / "a" / "b" / "uploads")
    store.ensure_root()
    assert store.root.is_dir()


def test_io_error_propagates(tmp_path):
    store = BlobStore(tmp_path / "missing")  # root не создан

    with pytest.raises(OSError):
        store.store(io.BytesIO(b"data"), "x.txt")


def test_truncated_stream_error_propagates(blob_store):
    class Broken(io.RawIOBase):
        def read(self, size=-1):
            raise OSError("connection reset")

    with pytest.raises(OSError):
        blob_store.store(Broken(), "x.txt")


def test_leading_dot_name_keeps_extension(blob_store):
    stored = blob_store.store(io.BytesIO(b"x"), ".bashrc")
    assert stored.endswith(".bashrc")
