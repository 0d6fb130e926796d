"""
Images component - image catalogue lookups for content blocks.
"""

from .models import ImageListOutput, ListImagesInput, ResolveImagesInput, ResolveImagesOutput
from .ports import ImageRepoPort


def run_list_images(inp: ListImagesInput, *, repo: ImageRepoPort) -> ImageListOutput:
    images = repo.list_all()
    if not images:
        return ImageListOutput(success=False, error="There is no image yet!")
    return ImageListOutput(images=images)


def run_resolve_images(inp: ResolveImagesInput, *, repo: ImageRepoPort) -> ResolveImagesOutput:
    """Look up every referenced image once; report the ids that don't exist."""
    found = {}
    missing = []
    for image_id in dict.fromkeys(inp.image_ids):
        image = repo.get_by_id(image_id)
        if image is None:
            missing.append(image_id)
        else:
            found[image_id] = image
    return ResolveImagesOutput(images=found, missing=missing)
