from dataclasses import dataclass, field

from src.domain.entities import Image


@dataclass(frozen=True)
class ListImagesInput:
    pass


@dataclass(frozen=True)
class ResolveImagesInput:
    image_ids: list[int]


@dataclass(frozen=True)
class ImageListOutput:
    images: list[Image] = field(default_factory=list)
    success: bool = True
    error: str | None = None


@dataclass(frozen=True)
class ResolveImagesOutput:
    images: dict[int, Image] = field(default_factory=dict)
    missing: list[int] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.missing
