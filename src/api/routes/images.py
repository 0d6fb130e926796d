from typing import Any

from fastapi import APIRouter, Depends

from src.api.deps import get_image_repo
from src.api.schemas import ImageResponse
from src.components.images import ListImagesInput, run_list_images
from src.domain.errors import NotFoundError

router = APIRouter()


@router.get("", response_model=list[ImageResponse])
def list_images(repo: Any = Depends(get_image_repo)) -> list[ImageResponse]:
    """List every image available to content blocks."""
    result = run_list_images(ListImagesInput(), repo=repo)
    if not result.success:
        raise NotFoundError(result.error or "There is no image yet!")
    return [ImageResponse.model_validate(image) for image in result.images]
