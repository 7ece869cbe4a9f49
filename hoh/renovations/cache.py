"""
Caching for the public renovation service list.

Each combination of list filters gets its own key; every key is dropped
when a service is saved or deleted.
"""
from django.core.cache import cache
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging

from .models import RenovationService

logger = logging.getLogger(__name__)

SERVICE_LIST_KEY_PREFIX = 'renovation_services:'
SERVICE_LIST_KEYS = f'{SERVICE_LIST_KEY_PREFIX}keys'

# Cache TTL (Time To Live) in seconds
SERVICE_LIST_CACHE_TTL = 600  # 10 minutes


def get_service_list_cache_key(category=None, popular=False, search=None):
    return f"{SERVICE_LIST_KEY_PREFIX}{category or 'all'}:{int(bool(popular))}:{(search or '').lower()}"


def get_cached_service_list(category, popular, search, build):
    """Return the cached service payload for these filters, building it with ``build()`` on a miss"""
    key = get_service_list_cache_key(category, popular, search)
    data = cache.get(key)
    if data is not None:
        logger.debug(f"Cache hit for renovation service list: {key}")
        return data
    data = build()
    cache.set(key, data, SERVICE_LIST_CACHE_TTL)
    known = cache.get(SERVICE_LIST_KEYS) or []
    if key not in known:
        cache.set(SERVICE_LIST_KEYS, known + [key], None)
    return data


def invalidate_service_list_cache():
    keys = cache.get(SERVICE_LIST_KEYS) or []
    if keys:
        cache.delete_many(keys)
    cache.delete(SERVICE_LIST_KEYS)
    logger.debug(f"Invalidated {len(keys)} renovation service list cache entries")


@receiver(post_save, sender=RenovationService)
@receiver(post_delete, sender=RenovationService)
def renovation_service_changed(sender, instance, **kwargs):
    invalidate_service_list_cache()
