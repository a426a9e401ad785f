# core/utils.py
"""
Core Utility Functions.

Image URL normalization shared by the sauce client: the Sauce API may hand
back absolute image URLs on the insecure ``http://`` scheme, and those are
rewritten to ``https://`` before any sauce reaches a subscriber or caller.
"""
from typing import List, Optional
from core.models import Sauce

INSECURE_PREFIX = "http://"
SECURE_PREFIX = "https://"


def normalize_image_url(url: Optional[str]) -> Optional[str]:
    """Replaces a leading http:// with https://. Anything else is returned as is."""
    if url and url.startswith(INSECURE_PREFIX):
        return SECURE_PREFIX + url[len(INSECURE_PREFIX):]
    return url


def normalize_sauce(sauce: Sauce) -> Sauce:
    """Returns a copy of the sauce with its image URL normalized; other fields are untouched."""
    normalized = normalize_image_url(sauce.image_url)
    if normalized == sauce.image_url:
        return sauce.model_copy()
    return sauce.model_copy(update={"image_url": normalized})


def normalize_sauces(sauces: List[Sauce]) -> List[Sauce]:
    return [normalize_sauce(sauce) for sauce in sauces]
