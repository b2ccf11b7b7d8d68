from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.core"
    label = "core"

    def ready(self) -> None:
        from modules.core.guard_rules import register_default_rules
        from shared.infrastructure.guards import referential_guard

        register_default_rules(referential_guard)
