from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("ledger", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="walletactivity",
            name="idempotency_key",
            field=models.CharField(
                blank=True,
                editable=False,
                help_text="Client-supplied key for safe resubmission.",
                max_length=64,
                null=True,
            ),
        ),
        migrations.AddConstraint(
            model_name="walletactivity",
            constraint=models.UniqueConstraint(
                fields=("profile", "idempotency_key"),
                name="uniq_activity_idempotency_per_profile",
            ),
        ),
    ]
