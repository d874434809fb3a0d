from abc import ABC, abstractmethod
from typing import Optional


class StorageProvider(ABC):
    @abstractmethod
    def save_image(self, data: bytes, filename: Optional[str] = None) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def delete_image(self, url: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError
