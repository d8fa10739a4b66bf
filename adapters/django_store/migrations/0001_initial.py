from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ParticipantRecord",
            fields=[
                ("identity", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("name", models.TextField()),
                ("role", models.TextField()),
                ("verified", models.BooleanField(default=False)),
            ],
            options={
                "db_table": "tracksure_participants",
                "ordering": ["identity"],
            },
        ),
        migrations.CreateModel(
            name="ProductRecord",
            fields=[
                ("product_id", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("name", models.TextField()),
                ("description", models.TextField(blank=True, default="")),
                ("origin", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField()),
                ("custodian", models.CharField(max_length=255)),
                ("active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "tracksure_products",
                "ordering": ["product_id"],
                "indexes": [
                    models.Index(fields=["custodian"], name="idx_product_custodian"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TransferEntryRecord",
            fields=[
                ("sequence", models.BigIntegerField(primary_key=True, serialize=False)),
                ("product_id", models.CharField(max_length=255)),
                ("entry_type", models.CharField(max_length=64)),
                ("source", models.CharField(max_length=255)),
                ("destination", models.CharField(max_length=255)),
                ("timestamp", models.DateTimeField()),
                ("location", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
            ],
            options={
                "db_table": "tracksure_transfer_entries",
                "ordering": ["sequence"],
                "indexes": [
                    models.Index(
                        fields=["product_id", "sequence"],
                        name="idx_transfer_product_seq",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SequenceCounter",
            fields=[
                ("name", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("next_value", models.BigIntegerField(default=0)),
            ],
            options={
                "db_table": "tracksure_sequence_counters",
            },
        ),
    ]
