from .attribute_parser import categorize, parse_attributes
from .utils import is_valid_uri, normalize_image_url

__all__ = ["parse_attributes", "categorize", "normalize_image_url", "is_valid_uri"]
