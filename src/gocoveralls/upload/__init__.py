"""Job payloads and submission to the coverage service."""

from gocoveralls.upload.client import CoverallsClient
from gocoveralls.upload.models import Job, JobResponse, build_job

__all__ = [
    "CoverallsClient",
    "Job",
    "JobResponse",
    "build_job",
]
