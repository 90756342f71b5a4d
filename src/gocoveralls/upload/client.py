"""HTTP client for the jobs API.

The payload is posted as a form-encoded ``json`` field. A single attempt is
made; failures surface as UploadError.
"""

from __future__ import annotations

import json

import httpx

from gocoveralls.core.errors import UploadError
from gocoveralls.core.logging import get_logger
from gocoveralls.upload.models import Job, JobResponse

log = get_logger("upload.client")


class CoverallsClient:
    """Submits jobs to a Coveralls-compatible endpoint."""

    def __init__(
        self,
        endpoint: str,
        *,
        timeout_sec: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout_sec
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def submit(self, job: Job) -> JobResponse:
        """Post a job and return the service's response.

        Raises:
            UploadError: Request failed, response was not JSON, or the
                service reported an error.
        """
        log.info("job_submitting", endpoint=self._endpoint, files=len(job.source_files))
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(self._endpoint, data={"json": job.to_json()})
        except httpx.RequestError as e:
            raise UploadError.request_failed(self._endpoint, str(e)) from e

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise UploadError.bad_response(response.status_code, response.text) from e
        if not isinstance(data, dict):
            raise UploadError.bad_response(response.status_code, response.text)

        result = JobResponse.from_dict(data)
        if result.error:
            raise UploadError.rejected(result.message)
        if response.is_error:
            raise UploadError.bad_response(response.status_code, response.text)

        log.info("job_submitted", status=response.status_code, url=result.url)
        return result
