"""Training session records and attachment helpers."""

from __future__ import annotations

import re
from datetime import date
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


FileKind = Literal["image", "pdf", "word", "excel", "other"]

_WORD_NAME = re.compile(r"\.(doc|docx)$", re.IGNORECASE)
_EXCEL_NAME = re.compile(r"\.(xls|xlsx|csv)$", re.IGNORECASE)


class TrainingFile(BaseModel):
    file_id: str = Field(..., min_length=1)
    name: str
    kind: FileKind = "other"
    data: str = ""
    size: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class TrainingSession(BaseModel):
    session_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = ""
    date: str
    files: List[TrainingFile] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def with_file(self, attachment: TrainingFile) -> "TrainingSession":
        return self.model_copy(update={"files": [*self.files, attachment]})

    def without_file(self, file_id: str) -> "TrainingSession":
        return self.model_copy(update={"files": [f for f in self.files if f.file_id != file_id]})


def classify_file_kind(content_type: Optional[str], filename: str) -> FileKind:
    """Bucket an upload by MIME type, falling back to the file extension."""

    mime = (content_type or "").lower()
    if mime.startswith("image/"):
        return "image"
    if "pdf" in mime:
        return "pdf"
    if "word" in mime or "document" in mime or _WORD_NAME.search(filename):
        return "word"
    if "excel" in mime or "spreadsheet" in mime or _EXCEL_NAME.search(filename):
        return "excel"
    return "other"


def size_label(num_bytes: int) -> str:
    return f"{num_bytes / 1024:.1f}KB"


def new_session(title: str, description: str = "", *, on: Optional[date] = None) -> TrainingSession:
    title = title.strip()
    if not title:
        raise ValueError("Training session title is required")
    return TrainingSession(
        session_id=uuid4().hex,
        title=title,
        description=description,
        date=(on or date.today()).isoformat(),
    )
