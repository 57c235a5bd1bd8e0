"""
S3 document download task.

Downloads documents from S3 into the request's temp workspace.
Transient failures (throttling, 5xx, network timeouts) are retried with
exponential backoff; a missing object fails immediately.

Dependencies: boto3, tenacity
System role: First stage of document loading (object store fetch)
"""

import logging
from pathlib import Path, PurePosixPath

import boto3
from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from notchy.core.document_processing.workspace import TempWorkspace
from notchy.core.exceptions import S3DownloadError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}
_TRANSIENT_CODES = {
    "SlowDown",
    "Throttling",
    "ThrottlingException",
    "RequestTimeout",
    "RequestTimeoutException",
    "InternalError",
    "ServiceUnavailable",
    "503",
    "500",
}
_NETWORK_ERRORS = (
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", "Unknown"))


def is_transient_s3_error(error: BaseException) -> bool:
    """Return True for S3 failures worth another attempt."""
    if isinstance(error, _NETWORK_ERRORS):
        return True
    if isinstance(error, ClientError):
        code = _error_code(error)
        if code in _NOT_FOUND_CODES:
            return False
        status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
        return code in _TRANSIENT_CODES or int(status or 0) >= 500
    return False


def _log_retry(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    error = outcome.exception() if outcome else None
    logger.warning(
        f"{__name__}:download - Retry {retry_state.attempt_number} after transient error",
        extra={"error_type": type(error).__name__ if error else None},
    )


class S3DownloadTask:
    """Download documents from S3 into a temp workspace."""

    def __init__(
        self,
        bucket: str,
        region: str = "eu-north-1",
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        s3_client=None,
    ) -> None:
        """
        Initialize S3 download task.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            max_attempts: Attempts per object for transient failures
            backoff_seconds: Initial exponential backoff
            s3_client: Optional pre-built boto3 S3 client
        """
        if not bucket:
            raise ValueError("bucket cannot be empty")

        self._bucket = bucket
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._s3_client = s3_client or boto3.client("s3", region_name=region)

    @property
    def bucket(self) -> str:
        return self._bucket

    def download(self, s3_key: str, workspace: TempWorkspace) -> Path:
        """
        Download a document into the workspace.

        Args:
            s3_key: S3 object key (e.g., "uploads/1693568801787math.pdf")
            workspace: Request-scoped temp workspace that owns the file

        Returns:
            Path: Local path of the downloaded file

        Raises:
            S3DownloadError: When the object is missing or all attempts fail
        """
        if not s3_key:
            raise S3DownloadError("S3 key is required", s3_key)

        filename = PurePosixPath(s3_key).name
        if not filename:
            raise S3DownloadError(f"Invalid S3 key: {s3_key}", s3_key)

        local_path = workspace.new_file_path(filename)

        retrying = Retrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._backoff_seconds, max=10),
            retry=retry_if_exception(is_transient_s3_error),
            before_sleep=_log_retry,
            reraise=True,
        )

        try:
            for attempt in retrying:
                with attempt:
                    self._s3_client.download_file(
                        Bucket=self._bucket,
                        Key=s3_key,
                        Filename=str(local_path),
                    )
        except ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                raise S3DownloadError(f"File not found in S3: {s3_key}", s3_key) from e
            raise S3DownloadError(f"Failed to download from S3: {e}", s3_key) from e
        except Exception as e:
            raise S3DownloadError(
                f"Unexpected error downloading from S3: {e}", s3_key
            ) from e

        if not local_path.exists():
            raise S3DownloadError(f"Download produced no file: {s3_key}", s3_key)

        return local_path
