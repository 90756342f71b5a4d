"""Job payload for the coverage service jobs API.

Payload shape:
{
    "repo_token": str,
    "service_name": str,
    "service_job_id": str,
    "service_number": str,          # optional
    "parallel": bool,
    "flag_name": str,               # optional
    "source_files": [
        {"name": str, "source": str, "source_digest": str, "coverage": [int | null, ...]}
    ],
    "git": {...},                   # optional
    "run_at": str                   # ISO-8601, UTC
}
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from gocoveralls.config.models import ServiceConfig
from gocoveralls.coverage.models import SourceFile
from gocoveralls.git.models import GitInfo


@dataclass(slots=True)
class Job:
    """Coverage data from a single run of a test suite."""

    repo_token: str
    service_name: str
    service_job_id: str
    source_files: list[SourceFile] = field(default_factory=list)
    git: GitInfo | None = None
    run_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    service_number: str | None = None
    parallel: bool = False
    flag_name: str | None = None
    upload_source: bool = True

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "repo_token": self.repo_token,
            "service_name": self.service_name,
            "service_job_id": self.service_job_id,
        }
        if self.service_number:
            payload["service_number"] = self.service_number
        payload["parallel"] = self.parallel
        if self.flag_name:
            payload["flag_name"] = self.flag_name
        payload["source_files"] = [
            sf.to_payload(include_source=self.upload_source) for sf in self.source_files
        ]
        if self.git is not None:
            payload["git"] = self.git.to_payload()
        payload["run_at"] = self.run_at.isoformat()
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_payload())


@dataclass(frozen=True, slots=True)
class JobResponse:
    """Response returned by the jobs API."""

    message: str = ""
    url: str = ""
    error: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JobResponse:
        return cls(
            message=str(data.get("message", "")),
            url=str(data.get("url", "")),
            error=bool(data.get("error", False)),
        )


def build_job(
    source_files: Sequence[SourceFile],
    *,
    config: ServiceConfig,
    git: GitInfo | None = None,
) -> Job:
    """Create a Job from projected files and the service settings.

    A random job id is generated when the config carries none.
    """
    return Job(
        repo_token=config.repo_token,
        service_name=config.service_name,
        service_job_id=config.service_job_id or uuid.uuid4().hex,
        source_files=list(source_files),
        git=git,
        service_number=config.service_number,
        parallel=config.parallel,
        flag_name=config.flag_name,
        upload_source=config.upload_source,
    )
