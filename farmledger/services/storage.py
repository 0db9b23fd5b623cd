# farmledger/services/storage.py
import os
import secrets
import string
import time
import logging

from werkzeug.utils import secure_filename

from ..errors import OperationFailed

log = logging.getLogger(__name__)

_NAME_ALPHABET = string.ascii_lowercase + string.digits


def generate_object_path(filename, prefix="parchis"):
    """``<prefix>/<epoch ms>-<7 random chars>.<ext>`` for an uploaded file."""
    ext = filename.rsplit(".", 1)[1].lower() if "." in filename else ""
    suffix = "".join(secrets.choice(_NAME_ALPHABET) for _ in range(7))
    name = f"{int(time.time() * 1000)}-{suffix}"
    if ext:
        name = f"{name}.{secure_filename(ext)}"
    return f"{prefix}/{name}"


class BlobStore:
    """Uploaded files on local disk, addressed by relative object path."""

    def __init__(self, root, public_base_url="/storage"):
        self.root = os.path.abspath(root)
        self.public_base_url = public_base_url.rstrip("/")

    @classmethod
    def from_config(cls, config):
        return cls(config["UPLOAD_FOLDER"], config.get("PUBLIC_STORAGE_URL", "/storage"))

    def _full_path(self, path):
        full = os.path.abspath(os.path.join(self.root, path))
        if os.path.commonpath([full, self.root]) != self.root:
            raise OperationFailed(f"Invalid object path: {path}", status_code=400, retryable=False)
        return full

    def upload(self, path, stream):
        """Store ``stream`` at ``path``. Existing objects are never replaced."""
        full = self._full_path(path)
        try:
            os.makedirs(os.path.dirname(full), exist_ok=True)
            with open(full, "xb") as fh:
                while True:
                    chunk = stream.read(64 * 1024)
                    if not chunk:
                        break
                    fh.write(chunk)
        except FileExistsError as e:
            raise OperationFailed(f"The resource already exists: {path}", status_code=409, retryable=False) from e
        except OSError as e:
            log.warning("Upload of %s failed: %s", path, e)
            self.remove(path)
            raise OperationFailed(f"Failed to upload file: {e.strerror or e}") from e
        log.info("Stored object %s", path)
        return path

    def public_url(self, path):
        return f"{self.public_base_url}/{path}"

    def remove(self, path):
        """Delete a stored object; a missing object is not an error."""
        if not path:
            return False
        try:
            os.remove(self._full_path(path))
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            log.warning("Could not remove object %s: %s", path, e)
            return False
