from __future__ import annotations

import random
from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from chefcore.apps.league.models import (
    Chef,
    ChefScore,
    Episode,
    Team,
    TeamChef,
    STATUS_ELIMINATED,
    STATUS_LCK,
)
from chefcore.apps.scoring.rules import SCORING_RULES

DEMO_TEAMS = [
    ("Flavor Favorites", "Alex", ["Chef Carlos", "Chef Maria", "Chef David"]),
    ("Sous Savants", "Jordan", ["Chef Lucia", "Chef James", "Chef Emma"]),
    ("Kitchen Killers", "Taylor", ["Chef Michael", "Chef Sarah", "Chef Daniel"]),
    ("Culinary Champions", "Morgan", ["Chef Olivia", "Chef Robert", "Chef Zoe"]),
]

FIRST_AIR_DATE = date(2025, 3, 13)


def ensure_staff_user(username: str, password: str):
    User = get_user_model()
    user, created = User.objects.get_or_create(username=username, defaults={"is_staff": True})
    if created or not user.has_usable_password():
        user.set_password(password)
    user.is_staff = True
    user.save()
    return user


class Command(BaseCommand):
    help = "Crea una liga DEMO (chefs, equipos, rosters, episodios y puntajes). Idempotente."

    def add_arguments(self, parser):
        parser.add_argument("--episodes", type=int, default=4)
        parser.add_argument("--seed", type=int, default=42, help="Semilla para los puntajes aleatorios")
        parser.add_argument("--reset", action="store_true", help="Borra puntajes antes de sembrar")
        parser.add_argument("--create-staff", action="store_true", help="Crea usuario staff commissioner/Pass1234!")

    @transaction.atomic
    def handle(self, *args, **opts):
        episodes_count: int = opts["episodes"]
        if episodes_count < 0:
            raise CommandError("--episodes no puede ser negativo")
        rng = random.Random(opts["seed"])

        if opts["reset"]:
            deleted, _ = ChefScore.objects.all().delete()
            self.stdout.write(self.style.WARNING(f"• {deleted} puntajes borrados"))

        # 1) Chefs + equipos + rosters
        chefs = []
        for team_name, owner, chef_names in DEMO_TEAMS:
            team, _ = Team.objects.get_or_create(name=team_name, defaults={"owner": owner})
            for chef_name in chef_names:
                chef, _ = Chef.objects.get_or_create(name=chef_name)
                TeamChef.objects.get_or_create(team=team, chef=chef)
                chefs.append(chef)
        self.stdout.write(self.style.SUCCESS(f"✓ {len(DEMO_TEAMS)} equipos y {len(chefs)} chefs"))

        # 2) Episodios
        episodes = []
        for n in range(1, episodes_count + 1):
            ep, _ = Episode.objects.get_or_create(
                episode_number=n,
                defaults={
                    "title": f"Episode {n}",
                    "air_date": FIRST_AIR_DATE + timedelta(weeks=n - 1),
                    "is_finale": n == episodes_count,
                },
            )
            if ep.is_finale != (n == episodes_count):
                ep.is_finale = n == episodes_count
                ep.save(update_fields=["is_finale"])
            episodes.append(ep)
        # Un solo finale: el último episodio sembrado
        if episodes_count:
            Episode.objects.exclude(episode_number=episodes_count).filter(is_finale=True).update(is_finale=False)
        self.stdout.write(self.style.SUCCESS(f"✓ {len(episodes)} episodios"))

        # 3) Puntajes: flags al azar, score = suma de la tabla publicada (solo para la demo)
        created = 0
        for ep in episodes:
            for chef in chefs:
                if rng.random() < 0.15:
                    continue  # hueco: sin puntaje cargado
                flags = {rule.flag: rng.random() < 0.15 for rule in SCORING_RULES}
                score = sum(rule.points for rule in SCORING_RULES if flags[rule.flag])
                _, was_created = ChefScore.objects.get_or_create(
                    chef=chef, episode=ep, defaults={"score": score, **flags}
                )
                created += int(was_created)
        self.stdout.write(self.style.SUCCESS(f"✓ {created} puntajes creados"))

        # 4) Algunos estados distintos de 'active'
        if len(chefs) >= 3 and episodes:
            Chef.objects.filter(pk=chefs[-1].pk).update(status=STATUS_ELIMINATED, eliminated=True)
            Chef.objects.filter(pk=chefs[-2].pk).update(status=STATUS_LCK)
            # Fila legacy: sin status, solo el booleano
            Chef.objects.filter(pk=chefs[-3].pk).update(status="", eliminated=True)

        if opts["create_staff"]:
            ensure_staff_user("commissioner", "Pass1234!")
            self.stdout.write(self.style.SUCCESS("✓ Usuario staff commissioner/Pass1234!"))

        self.stdout.write(self.style.SUCCESS("✔ Demo lista."))
