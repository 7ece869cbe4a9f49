from django.apps import AppConfig


class ShowcaseConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'hoh.showcase'

    def ready(self):
        """Import signals when app is ready"""
        import hoh.showcase.cache  # noqa: F401  # Cache invalidation signals
