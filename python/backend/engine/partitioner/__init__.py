from backend.engine.partitioner.partitioner import (
    IMAGE_SUFFIXES,
    crop_to_square,
    find_images,
    load_image,
    partition,
    sample_image,
)

__all__ = [
    "IMAGE_SUFFIXES",
    "crop_to_square",
    "find_images",
    "load_image",
    "partition",
    "sample_image",
]
