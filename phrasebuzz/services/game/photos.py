import base64
import binascii
import os
import re
import time

from .errors import UploadError

_DATA_URL_RE = re.compile(r'^data:image/([\w.+-]+);base64,(.*)$', re.DOTALL)


def is_image_data_url(value) -> bool:
    return isinstance(value, str) and value.startswith('data:image/')


def _file_extension(subtype: str) -> str:
    # svg+xml -> svg, vnd.microsoft.icon -> icon
    base = subtype.lower().split('+', 1)[0].rsplit('.', 1)[-1]
    return re.sub(r'[^a-z0-9]', '', base) or 'jpeg'


class InlinePhotoStore:
    """Keeps the data URI itself; lost on restart."""

    def store(self, data_url: str) -> str:
        return data_url


class DirectoryPhotoStore:
    """Writes the decoded image to disk and returns the URL it is served from."""

    def __init__(self, directory: str, url_prefix: str = '/api/game/photos'):
        self.directory = directory
        self.url_prefix = url_prefix.rstrip('/')

    def store(self, data_url: str) -> str:
        match = _DATA_URL_RE.match(data_url)
        if not match:
            raise UploadError('Photo is not a base64 image data URL')
        ext = _file_extension(match.group(1))
        try:
            payload = base64.b64decode(match.group(2), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise UploadError(f'Photo payload is not valid base64: {exc}') from exc

        filename = f"winner-photo-{int(time.time() * 1000)}.{ext}"
        try:
            os.makedirs(self.directory, exist_ok=True)
            with open(os.path.join(self.directory, filename), 'wb') as fh:
                fh.write(payload)
        except OSError as exc:
            raise UploadError(f'Could not write photo: {exc}') from exc
        return f"{self.url_prefix}/{filename}"
