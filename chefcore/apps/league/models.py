from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models


STATUS_ACTIVE = "active"
STATUS_LCK = "lck"
STATUS_ELIMINATED = "eliminated"

STATUS_CHOICES = (
    (STATUS_ACTIVE, "Active"),
    (STATUS_LCK, "Last Chance Kitchen"),
    (STATUS_ELIMINATED, "Eliminated"),
)


class Chef(models.Model):
    """
    Concursante del programa.
    `status` es la representación actual; los booleanos legacy se mantienen
    porque las filas viejas solo traen `eliminated`.
    """
    name = models.CharField(max_length=120, unique=True)
    status = models.CharField(
        max_length=16,
        choices=STATUS_CHOICES,
        blank=True,
        default="",
        help_text="Vacío = se deriva del flag legacy 'eliminated'.",
    )

    # Legacy
    eliminated = models.BooleanField(default=False)
    in_finale = models.BooleanField(default=False)
    is_winner = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("name",)

    def __str__(self) -> str:
        return self.name

    @property
    def normalized_status(self) -> str:
        from chefcore.apps.scoring.records import ChefStatus
        return ChefStatus.normalize(self.status, self.eliminated).value


class Episode(models.Model):
    episode_number = models.PositiveIntegerField(
        unique=True,
        help_text="Orden cronológico del episodio (1..N).",
    )
    title = models.CharField(max_length=200, blank=True)
    air_date = models.DateField(null=True, blank=True)
    is_finale = models.BooleanField(default=False)

    class Meta:
        ordering = ("episode_number",)

    def __str__(self) -> str:
        if self.title:
            return f"Ep {self.episode_number} · {self.title}"
        return f"Ep {self.episode_number}"

    def clean(self):
        if self.episode_number is not None and self.episode_number < 1:
            raise ValidationError("episode_number debe ser positivo")


class ChefScore(models.Model):
    """
    Puntaje de un chef en un episodio.
    Los flags son anotaciones; `score` lo carga el admin y NO se calcula desde ellos.
    """
    chef = models.ForeignKey(Chef, on_delete=models.CASCADE, related_name="scores")
    episode = models.ForeignKey(Episode, on_delete=models.CASCADE, related_name="scores")
    score = models.IntegerField(default=0)

    quickfire_winner = models.BooleanField(default=False)
    quickfire_top = models.BooleanField(default=False)
    quickfire_bottom = models.BooleanField(default=False)
    elimination_winner = models.BooleanField(default=False)
    elimination_top = models.BooleanField(default=False)
    elimination_bottom = models.BooleanField(default=False)
    lck_winner = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            # Un solo registro por (chef, episodio)
            models.UniqueConstraint(fields=("chef", "episode"), name="uniq_chef_episode_score"),
        ]
        ordering = ("episode__episode_number", "chef__name")

    def __str__(self) -> str:
        return f"{self.chef} · {self.episode} = {self.score}"


class Team(models.Model):
    name = models.CharField(max_length=160, unique=True)
    owner = models.CharField(max_length=120, blank=True)
    chefs = models.ManyToManyField(Chef, through="TeamChef", related_name="teams", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("id",)

    def __str__(self) -> str:
        return self.name

    def roster_size(self) -> int:
        return TeamChef.objects.filter(team=self).count()


class TeamChef(models.Model):
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="roster")
    chef = models.ForeignKey(Chef, on_delete=models.CASCADE, related_name="roster_slots")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = (("team", "chef"),)
        ordering = ("team", "chef__name")

    def __str__(self) -> str:
        return f"{self.team} · {self.chef}"
