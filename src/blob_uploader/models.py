"""Payload and result models for blob uploads."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


@dataclass
class FilePayload:
    """A named binary payload to upload.

    ``body`` is handed to the transport unchanged: bytes, str, or a byte
    iterator.
    """

    name: str
    size: int | float
    type: str | None = None
    body: Any = b""

    @classmethod
    def from_path(cls, path: str | Path, *, mime: str | None = None) -> "FilePayload":
        file_path = Path(path)
        data = file_path.read_bytes()
        guessed, _ = mimetypes.guess_type(file_path.name)
        return cls(
            name=file_path.name,
            size=len(data),
            type=mime or guessed,
            body=data,
        )


class UploadResult(BaseModel):
    """Normalized descriptor of a stored blob."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: Any = None
    filename: str
    local_path: str | None = None
    download_url: str = ""
    mime: str | None = None
    size: int | float | None = None
    agent: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
