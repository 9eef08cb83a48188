from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Chef",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120, unique=True)),
                (
                    "status",
                    models.CharField(
                        blank=True,
                        choices=[("active", "Active"), ("lck", "Last Chance Kitchen"), ("eliminated", "Eliminated")],
                        default="",
                        help_text="Vacío = se deriva del flag legacy 'eliminated'.",
                        max_length=16,
                    ),
                ),
                ("eliminated", models.BooleanField(default=False)),
                ("in_finale", models.BooleanField(default=False)),
                ("is_winner", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ("name",),
            },
        ),
        migrations.CreateModel(
            name="Episode",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "episode_number",
                    models.PositiveIntegerField(help_text="Orden cronológico del episodio (1..N).", unique=True),
                ),
                ("title", models.CharField(blank=True, max_length=200)),
                ("air_date", models.DateField(blank=True, null=True)),
                ("is_finale", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ("episode_number",),
            },
        ),
        migrations.CreateModel(
            name="Team",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=160, unique=True)),
                ("owner", models.CharField(blank=True, max_length=120)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ("id",),
            },
        ),
        migrations.CreateModel(
            name="TeamChef",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "chef",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="roster_slots",
                        to="league.chef",
                    ),
                ),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="roster",
                        to="league.team",
                    ),
                ),
            ],
            options={
                "ordering": ("team", "chef__name"),
                "unique_together": {("team", "chef")},
            },
        ),
        migrations.AddField(
            model_name="team",
            name="chefs",
            field=models.ManyToManyField(
                blank=True, related_name="teams", through="league.TeamChef", to="league.chef"
            ),
        ),
        migrations.CreateModel(
            name="ChefScore",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("score", models.IntegerField(default=0)),
                ("quickfire_winner", models.BooleanField(default=False)),
                ("quickfire_top", models.BooleanField(default=False)),
                ("quickfire_bottom", models.BooleanField(default=False)),
                ("elimination_winner", models.BooleanField(default=False)),
                ("elimination_top", models.BooleanField(default=False)),
                ("elimination_bottom", models.BooleanField(default=False)),
                ("lck_winner", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "chef",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="scores",
                        to="league.chef",
                    ),
                ),
                (
                    "episode",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="scores",
                        to="league.episode",
                    ),
                ),
            ],
            options={
                "ordering": ("episode__episode_number", "chef__name"),
            },
        ),
        migrations.AddConstraint(
            model_name="chefscore",
            constraint=models.UniqueConstraint(fields=("chef", "episode"), name="uniq_chef_episode_score"),
        ),
    ]
