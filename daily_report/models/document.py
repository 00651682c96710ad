"""Rendered export artifacts."""

from dataclasses import dataclass
from pathlib import Path

MIME_TYPES = {
    "pdf": "application/pdf",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "zip": "application/zip",
}


@dataclass(frozen=True)
class RenderedDocument:
    """Binary payload of one export plus the name it is offered under."""

    file_name: str
    data: bytes

    @property
    def extension(self) -> str:
        return Path(self.file_name).suffix.lstrip(".").lower()

    @property
    def mime_type(self) -> str:
        return MIME_TYPES.get(self.extension, "application/octet-stream")

    def save(self, directory: Path) -> Path:
        """Write the payload under ``directory`` and return the file path."""
        target = Path(directory) / self.file_name
        target.write_bytes(self.data)
        return target
