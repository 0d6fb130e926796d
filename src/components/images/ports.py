from typing import Protocol

from src.domain.entities import Image


class ImageRepoPort(Protocol):
    def get_by_id(self, image_id: int) -> Image | None: ...
    def list_all(self) -> list[Image]: ...
