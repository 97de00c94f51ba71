import logging
import re
import time
import uuid
from pathlib import Path
from typing import BinaryIO

CHUNK_SIZE = 1024 * 1024  # 1MB
DEFAULT_FILENAME = "upload"

_DRIVE_RE = re.compile(r"^[A-Za-z]:")

logger = logging.getLogger(__name__)


def sanitize_filename(name: str | None) -> str:
    """Оставить только последний компонент пути, без `..`, `.` и буквы диска."""
    if not name:
        return DEFAULT_FILENAME
    parts = [p for p in name.replace("\\", "/").split("/") if p not in ("", ".", "..")]
    if not parts:
        return DEFAULT_FILENAME
    base = _DRIVE_RE.sub("", parts[-1]).replace("\x00", "")
    if base in ("", ".", ".."):
        return DEFAULT_FILENAME
    return base


def file_extension(name: str) -> str:
    idx = name.rfind(".")
    if idx < 0:
        return ""
    return name[idx:]


def make_stored_name(original_filename: str | None) -> str:
    ext = file_extension(sanitize_filename(original_filename))
    return f"{int(time.time() * 1000)}-{uuid.uuid4()}{ext}"


class BlobStore:
    def __init__(self, root: str | Path):
        self.root = Path(root).expanduser().resolve()

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, stored_name: str) -> Path:
        path = (self.root / stored_name).resolve()
        if path.parent != self.root:
            raise ValueError(f"Stored name escapes storage root: {stored_name!r}")
        return path

    def store(self, stream: BinaryIO, original_filename: str | None) -> str:
        """Скопировать поток в root/<stored_name> и вернуть stored_name."""
        stored_name = make_stored_name(original_filename)
        destination = self.path_for(stored_name)

        size = 0
        # "xb": существующий файл никогда не перезаписывается
        with destination.open("xb") as out:
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                out.write(chunk)

        logger.info("Stored %s (%d bytes) as %s", original_filename, size, stored_name)
        return stored_name
