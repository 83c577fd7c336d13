"""Media upload bridge: forwards binary payloads to a hosting service."""

import base64
import hashlib
import json
import logging
import mimetypes
import time
from abc import ABC, abstractmethod
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from vidstore.config import settings
from vidstore.errors import UploadFailed

logger = logging.getLogger(__name__)


class MediaUploader(ABC):
    """Abstract interface for turning a binary payload into a durable URL."""

    @abstractmethod
    def upload(self, payload: bytes, *, resource_type: str = "video", filename: str | None = None) -> str:
        """Store a payload remotely.

        Args:
            payload: Raw file bytes.
            resource_type: Hosting hint ("video", "image", "raw", "auto").
            filename: Original file name, used to guess the MIME type.

        Returns:
            Secure URL of the stored media.

        Raises:
            UploadFailed: On misconfiguration, network or service errors.
        """


class CloudinaryUploader(MediaUploader):
    """Signed uploads to Cloudinary's REST upload endpoint.

    The payload is sent as a base64 data URI in a form-encoded POST, which
    the upload API accepts in place of a multipart file. No retries.
    """

    _ENDPOINT = "https://api.cloudinary.com/v1_1/{cloud}/{resource_type}/upload"

    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._cloud_name = cloud_name if cloud_name is not None else settings.cloudinary_cloud_name
        self._api_key = api_key if api_key is not None else settings.cloudinary_api_key
        self._api_secret = api_secret if api_secret is not None else settings.cloudinary_api_secret
        self._timeout = timeout if timeout is not None else settings.upload_timeout

    @property
    def configured(self) -> bool:
        return bool(self._cloud_name and self._api_key and self._api_secret)

    def upload(self, payload: bytes, *, resource_type: str = "video", filename: str | None = None) -> str:
        if not self.configured:
            raise UploadFailed(
                "Cloudinary is not configured. Set VIDSTORE_CLOUDINARY_CLOUD_NAME, "
                "VIDSTORE_CLOUDINARY_API_KEY and VIDSTORE_CLOUDINARY_API_SECRET."
            )
        if not payload:
            raise UploadFailed("Refusing to upload an empty payload.")

        url = self._ENDPOINT.format(cloud=self._cloud_name, resource_type=resource_type)
        body = urlencode(self._form(payload, filename)).encode("ascii")
        request = Request(url, data=body, method="POST")
        request.add_header("Content-Type", "application/x-www-form-urlencoded")

        logger.info("Uploading %d bytes to Cloudinary (%s)", len(payload), resource_type)
        try:
            with urlopen(request, timeout=self._timeout) as resp:
                data = json.loads(resp.read().decode("utf-8"))
        except HTTPError as e:
            raise UploadFailed(f"Cloudinary rejected the upload ({e.code}): {self._error_detail(e)}") from e
        except (URLError, TimeoutError) as e:
            raise UploadFailed(f"Cloudinary upload failed: {e}") from e
        except json.JSONDecodeError as e:
            raise UploadFailed(f"Unreadable Cloudinary response: {e}") from e

        secure_url = data.get("secure_url")
        if not secure_url:
            raise UploadFailed(f"Cloudinary response has no secure_url: {str(data)[:100]}")
        logger.info("Upload stored at %s", secure_url)
        return secure_url

    def _form(self, payload: bytes, filename: str | None) -> dict[str, str]:
        """Build the signed form fields."""
        timestamp = str(int(time.time()))
        mime = (mimetypes.guess_type(filename)[0] if filename else None) or "application/octet-stream"
        encoded = base64.b64encode(payload).decode("ascii")
        return {
            "file": f"data:{mime};base64,{encoded}",
            "api_key": self._api_key,
            "timestamp": timestamp,
            "signature": self.sign({"timestamp": timestamp}, self._api_secret),
        }

    @staticmethod
    def sign(params: dict[str, str], api_secret: str) -> str:
        """Cloudinary request signature: SHA-1 of sorted ``k=v`` pairs + secret."""
        to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params))
        return hashlib.sha1((to_sign + api_secret).encode("utf-8")).hexdigest()

    @staticmethod
    def _error_detail(error: HTTPError) -> str:
        try:
            return json.loads(error.read().decode("utf-8"))["error"]["message"]
        except (ValueError, KeyError, TypeError, OSError):
            return str(error.reason)
