from django.apps import AppConfig


class RenovationsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'hoh.renovations'

    def ready(self):
        # Register cache invalidation signals
        import hoh.renovations.cache  # noqa: F401
