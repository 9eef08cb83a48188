from django.apps import AppConfig
from django.db.models.signals import post_migrate


def ensure_commissioners_group(sender, **kwargs):
    # Crea el grupo "commissioners" si no existe (idempotente)
    from django.contrib.auth.models import Group
    Group.objects.get_or_create(name="commissioners")


class PanelConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "chefcore.apps.panel"
    verbose_name = "Panel (administración de la liga)"

    def ready(self):
        # Conectamos el hook post_migrate una sola vez
        post_migrate.connect(ensure_commissioners_group, sender=self, dispatch_uid="panel.ensure_commissioners_group")
