from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Medicine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("strength", models.CharField(max_length=64)),
                ("form", models.CharField(max_length=64)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "catalog_medicine",
                "indexes": [models.Index(fields=["is_active", "name"], name="catalog_med_active_name_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("name", "strength", "form"), name="uq_medicine_name_strength_form")
                ],
            },
        ),
    ]
