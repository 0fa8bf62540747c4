import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class ActivityConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "activity"
    verbose_name = "Activity"

    def ready(self):
        # Register event bus listeners
        try:
            from activity.infra.events.listeners import register_activity_listeners

            event_bus = register_activity_listeners()

            # Redis only: starts the subscriber thread
            event_bus.start_listening()
        except Exception as e:
            logger.warning(f"Failed to initialize activity event listeners: {e}")
