"""
Data Models for Batch Ingestion

UploadReport summarises one batch of uploaded files: which files (or
archive entries) were extracted and chunked, and a human-readable reason
for every one that failed.
"""

import json
from typing import Any

from pydantic import BaseModel, Field

from chunking.models import ChunkingResult

ALL_SUCCEEDED_MESSAGE = "All files uploaded and processed successfully"
SOME_FAILED_MESSAGE = "Some files failed to upload and process"


class UploadReport(BaseModel):
    """Per-file outcome of a batch, in processing order."""

    message: str = Field(
        ALL_SUCCEEDED_MESSAGE,
        description="Summary for the uploader",
    )
    num_files_succeeded: int = 0
    num_files_failed: int = 0
    successful_file_names: list[str] = Field(default_factory=list)
    failed_file_names: dict[str, str] = Field(
        default_factory=dict,
        description="File or archive entry label -> failure reason; repeated names get a \" (n)\" suffix",
    )
    results: list[ChunkingResult] = Field(
        default_factory=list,
        description="Chunking results of the successful documents",
        exclude=True,
    )

    def record_success(self, name: str, result: ChunkingResult) -> None:
        self.num_files_succeeded += 1
        self.successful_file_names.append(name)
        self.results.append(result)
        self._refresh_message()

    def record_failure(self, name: str, reason: str) -> None:
        self.num_files_failed += 1
        self.failed_file_names[self._unique_failure_label(name)] = reason
        self._refresh_message()

    def _unique_failure_label(self, name: str) -> str:
        label = name
        n = 1
        while label in self.failed_file_names:
            n += 1
            label = f"{name} ({n})"
        return label

    def _refresh_message(self) -> None:
        self.message = SOME_FAILED_MESSAGE if self.num_files_failed else ALL_SUCCEEDED_MESSAGE

    @property
    def has_failures(self) -> bool:
        return self.num_files_failed > 0

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
