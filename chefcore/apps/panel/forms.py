# chefcore/apps/panel/forms.py
from __future__ import annotations

from django import forms
from django.utils import timezone

from chefcore.apps.league.models import Chef, Episode, Team, STATUS_CHOICES
from chefcore.apps.scoring.rules import SCORING_RULES, points_label


class ChefForm(forms.ModelForm):
    class Meta:
        model = Chef
        fields = ["name"]
        labels = {"name": "Chef Name"}


class ChefStatusForm(forms.Form):
    status = forms.ChoiceField(choices=STATUS_CHOICES)


class TeamForm(forms.ModelForm):
    class Meta:
        model = Team
        fields = ["name", "owner"]
        labels = {"name": "Team Name", "owner": "Owner"}


class EpisodeForm(forms.ModelForm):
    class Meta:
        model = Episode
        fields = ["episode_number", "title", "air_date", "is_finale"]
        widgets = {"air_date": forms.DateInput(attrs={"type": "date"})}
        labels = {"episode_number": "Episode Number", "is_finale": "Finale"}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Precargar fecha de hoy como en el formulario original
        if not self.is_bound and not self.instance.pk:
            self.fields["air_date"].initial = timezone.localdate()


class ScoreForm(forms.Form):
    """
    Alta/edición de puntaje por (chef, episodio).
    Los flags no modifican el score: ambos se cargan por separado.
    """
    chef = forms.ModelChoiceField(queryset=Chef.objects.all().order_by("name"), empty_label="Select chef")
    episode = forms.ModelChoiceField(
        queryset=Episode.objects.all().order_by("episode_number"), empty_label="Select episode"
    )
    score = forms.IntegerField(label="Points")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for rule in SCORING_RULES:
            self.fields[rule.flag] = forms.BooleanField(
                required=False,
                label=rule.label,
                help_text=f"{points_label(rule.points)} per the rules",
            )

    def flags(self) -> dict:
        return {rule.flag: bool(self.cleaned_data.get(rule.flag)) for rule in SCORING_RULES}


class RosterAddForm(forms.Form):
    chef = forms.ModelChoiceField(queryset=Chef.objects.none(), empty_label="Select chef")

    def __init__(self, *args, **kwargs):
        team: Team = kwargs.pop("team")
        super().__init__(*args, **kwargs)
        self.fields["chef"].queryset = Chef.objects.exclude(roster_slots__team=team).order_by("name")
