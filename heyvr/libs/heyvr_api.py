"""heyVR developer API client for publishing game builds.

API documentation:
https://docs.heyvr.io/en/developer-area/publish-a-game#h-2-upload-via-api
"""

import io
import requests
from typing import Any, Callable, Dict, Optional
from heyvr.libs.streams import LogStream

UPLOAD_URL: str = "https://heyvr.io/api/developer/game/upload-build"


class UploadError(Exception):
    """Raised when heyVR rejects a build or the request cannot be completed."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class _ProgressReader:
    """File-like request body that reports how much of it has been sent."""

    def __init__(self, data: bytes, callback: Callable[[float], None]) -> None:
        self._buffer = io.BytesIO(data)
        self._length = len(data)
        self._callback = callback

    def __len__(self) -> int:
        return self._length

    def read(self, size: int = -1) -> bytes:
        chunk = self._buffer.read(size)
        if chunk and self._length:
            self._callback(self._buffer.tell() / self._length)
        return chunk


class HeyVRUploader:
    """Handles uploading zipped game builds to heyVR"""

    def __init__(self, access_token: str, stream: LogStream, timeout: float = 300) -> None:
        """Initialize the uploader with the developer access token"""
        if not access_token:
            raise ValueError("access_token cannot be None or empty")

        self.access_token: str = access_token
        self.stream: LogStream = stream
        self.timeout: float = timeout
        self.session: requests.Session = requests.Session()
        self._last_step: int = -1

    def _report_progress(self, fraction: float) -> None:
        """Log upload progress in 10% steps."""
        step = int(fraction * 10)
        if step != self._last_step:
            self._last_step = step
            self.stream.log(f"Upload progress: {round(fraction * 100, 2)} %")

    def upload_build(self, game_id: str, game_file: bytes, version: str, sdk_version: int = 1) -> Dict[str, Any]:
        """
        Upload a zipped build to heyVR

        Args:
            game_id: heyVR game slug
            game_file: Zip archive bytes, index.html at the root
            version: Increment keyword, one of 'major', 'minor' or 'patch'
            sdk_version: heyVR SDK version the build targets

        Returns:
            dict with keys: game_id, version, sdk_version, size, status_code, response

        Raises:
            UploadError: If the request fails or heyVR answers with anything but 200
        """
        request = requests.Request(
            'POST',
            UPLOAD_URL,
            data={
                'game_slug': game_id,
                'version': version,
                'sdk_version': str(sdk_version),
            },
            files={'game_file': ('game.zip', game_file, 'application/zip')},
            headers={
                'Accept': 'application/json',
                'Authorization': f"Bearer {self.access_token}",
            },
        )
        prepared = self.session.prepare_request(request)
        # Stream the encoded body so progress can be reported
        self._last_step = -1
        prepared.body = _ProgressReader(prepared.body, self._report_progress)

        settings = self.session.merge_environment_settings(prepared.url, {}, None, None, None)

        try:
            response = self.session.send(prepared, timeout=self.timeout, **settings)
        except requests.exceptions.RequestException as e:
            status_text = None
            body = None
            if e.response is not None:
                status_text = e.response.reason
                body = e.response.text
            message = f"Request failed with error: {str(e)}"
            if status_text:
                message += f" ({status_text})"
            raise UploadError(message, body=body) from e

        if response.status_code != 200:
            raise UploadError(
                f"Upload failed with code {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload: Any = response.json()
        except ValueError:
            payload = response.text

        return {
            'game_id': game_id,
            'version': version,
            'sdk_version': sdk_version,
            'size': len(game_file),
            'status_code': response.status_code,
            'response': payload,
        }
