from pathlib import Path
from typing import Optional
from uuid import uuid4

from recipe_pipeline.app.services.storage.base import StorageProvider


class LocalStorageProvider(StorageProvider):
    def __init__(self, media_root: Path, base_url: str = "/media"):
        self.media_root = Path(media_root)
        self.base_url = base_url.rstrip("/")
        self.media_root.mkdir(parents=True, exist_ok=True)

    def save_image(self, data: bytes, filename: Optional[str] = None) -> str:
        extension = Path(filename or "upload").suffix
        name = f"{uuid4().hex}{extension}"
        (self.media_root / name).write_bytes(data)
        return f"{self.base_url}/{name}"

    def delete_image(self, url: str) -> None:
        prefix = f"{self.base_url}/"
        if not url.startswith(prefix):
            return
        path = self.media_root / url[len(prefix) :]
        if path.exists():
            path.unlink()
