"""
Caching for the public testimonial and gallery lists.

Lists are rebuilt from the database on a miss and dropped whenever a
testimonial or gallery item is saved or deleted.
"""
from django.core.cache import cache
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging

from .models import Testimonial, GalleryItem

logger = logging.getLogger(__name__)

# Cache key prefixes
TESTIMONIAL_LIST_KEY = 'testimonial_list'
GALLERY_LIST_KEY_PREFIX = 'gallery_list:'

# Cache TTL (Time To Live) in seconds
TESTIMONIAL_LIST_CACHE_TTL = 900  # 15 minutes
GALLERY_LIST_CACHE_TTL = 900  # 15 minutes


def get_gallery_list_cache_key(category=None):
    return f"{GALLERY_LIST_KEY_PREFIX}{category or 'all'}"


def get_cached_testimonials(build):
    """Return the cached testimonial payload, building it with ``build()`` on a miss"""
    data = cache.get(TESTIMONIAL_LIST_KEY)
    if data is not None:
        logger.debug("Cache hit for testimonial list")
        return data
    data = build()
    cache.set(TESTIMONIAL_LIST_KEY, data, TESTIMONIAL_LIST_CACHE_TTL)
    return data


def get_cached_gallery(category, build):
    key = get_gallery_list_cache_key(category)
    data = cache.get(key)
    if data is not None:
        logger.debug(f"Cache hit for gallery list: {category or 'all'}")
        return data
    data = build()
    cache.set(key, data, GALLERY_LIST_CACHE_TTL)
    # Remember which category keys exist so they can all be dropped together
    known = cache.get(f"{GALLERY_LIST_KEY_PREFIX}keys") or []
    if key not in known:
        cache.set(f"{GALLERY_LIST_KEY_PREFIX}keys", known + [key], None)
    return data


def invalidate_testimonial_cache():
    cache.delete(TESTIMONIAL_LIST_KEY)
    logger.debug("Invalidated testimonial list cache")


def invalidate_gallery_cache():
    keys = cache.get(f"{GALLERY_LIST_KEY_PREFIX}keys") or []
    cache.delete_many(keys + [get_gallery_list_cache_key()])
    cache.delete(f"{GALLERY_LIST_KEY_PREFIX}keys")
    logger.debug(f"Invalidated {len(keys)} gallery list cache entries")


@receiver(post_save, sender=Testimonial)
@receiver(post_delete, sender=Testimonial)
def testimonial_changed(sender, instance, **kwargs):
    invalidate_testimonial_cache()


@receiver(post_save, sender=GalleryItem)
@receiver(post_delete, sender=GalleryItem)
def gallery_item_changed(sender, instance, **kwargs):
    invalidate_gallery_cache()
