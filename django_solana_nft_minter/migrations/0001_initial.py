from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MintedNft",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("mint_address", models.CharField(max_length=64, unique=True)),
                ("owner_address", models.CharField(db_index=True, max_length=64)),
                (
                    "environment",
                    models.CharField(
                        choices=[
                            ("devnet", "Devnet (Testing)"),
                            ("mainnet", "Mainnet (Production)"),
                        ],
                        db_index=True,
                        default="devnet",
                        max_length=10,
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("image_uri", models.CharField(max_length=512)),
                ("metadata_uri", models.CharField(max_length=512)),
                ("attributes", models.JSONField(blank=True, default=list)),
                ("signature", models.CharField(max_length=255)),
                ("created", models.DateTimeField(auto_now_add=True)),
                ("updated", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created", "-id"],
            },
        ),
    ]
