"""
Images component - image catalogue.
"""

from .component import run_list_images, run_resolve_images
from .models import ImageListOutput, ListImagesInput, ResolveImagesInput, ResolveImagesOutput
from .ports import ImageRepoPort

__all__ = [
    "run_list_images",
    "run_resolve_images",
    "ImageListOutput",
    "ListImagesInput",
    "ResolveImagesInput",
    "ResolveImagesOutput",
    "ImageRepoPort",
]
