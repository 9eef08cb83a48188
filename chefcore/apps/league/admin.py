from __future__ import annotations

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from .models import Chef, ChefScore, Episode, Team, TeamChef, STATUS_ACTIVE, STATUS_ELIMINATED, STATUS_LCK


# -----------------------------
# Chef
# -----------------------------
@admin.register(Chef)
class ChefAdmin(admin.ModelAdmin):
    list_display = ("name", "status", "normalized_status", "eliminated", "in_finale", "is_winner")
    list_filter = ("status", "eliminated", "in_finale")
    search_fields = ("name",)
    actions = ["mark_active", "mark_lck", "mark_eliminated"]

    def _set_status(self, request, queryset, status: str):
        updated = queryset.update(status=status, eliminated=(status == STATUS_ELIMINATED))
        self.message_user(request, f"{updated} chefs actualizados a '{status}'.", level=messages.SUCCESS)

    @admin.action(description=_("Marcar como activos"))
    def mark_active(self, request, queryset):
        self._set_status(request, queryset, STATUS_ACTIVE)

    @admin.action(description=_("Mandar a Last Chance Kitchen"))
    def mark_lck(self, request, queryset):
        self._set_status(request, queryset, STATUS_LCK)

    @admin.action(description=_("Marcar como eliminados"))
    def mark_eliminated(self, request, queryset):
        self._set_status(request, queryset, STATUS_ELIMINATED)


# -----------------------------
# Episode
# -----------------------------
@admin.register(Episode)
class EpisodeAdmin(admin.ModelAdmin):
    list_display = ("episode_number", "title", "air_date", "is_finale")
    list_filter = ("is_finale",)
    search_fields = ("title",)
    ordering = ("episode_number",)


# -----------------------------
# ChefScore
# -----------------------------
@admin.register(ChefScore)
class ChefScoreAdmin(admin.ModelAdmin):
    list_display = (
        "episode",
        "chef",
        "score",
        "quickfire_winner",
        "elimination_winner",
        "elimination_bottom",
        "lck_winner",
        "updated_at",
    )
    list_filter = ("episode", "chef")
    search_fields = ("chef__name", "episode__title")
    ordering = ("episode__episode_number", "chef__name")
    raw_id_fields = ("chef", "episode")


# -----------------------------
# Team (+ roster inline)
# -----------------------------
class TeamChefInline(admin.TabularInline):
    model = TeamChef
    extra = 0
    fields = ("chef", "created_at")
    readonly_fields = ("created_at",)
    autocomplete_fields = ["chef"]


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "roster_count", "created_at")
    search_fields = ("name", "owner")
    inlines = [TeamChefInline]

    def roster_count(self, obj: Team) -> int:
        return obj.roster_size()
    roster_count.short_description = "Chefs"
