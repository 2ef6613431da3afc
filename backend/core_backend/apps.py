from django.apps import AppConfig
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


class CoreBackendConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core_backend"

    def ready(self):
        """
        Log the effective order configuration once Django has started so a
        misconfigured deployment is visible in the first lines of output.
        """
        logger.debug(
            f"Order engine configured with tax rate {getattr(settings, 'ORDER_TAX_RATE', None)} "
            f"and '{getattr(settings, 'ORDER_STATUS_TRANSITIONS', None)}' status transitions"
        )
