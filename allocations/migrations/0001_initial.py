import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('farmers', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Allocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('allocation_type', models.CharField(blank=True, db_index=True, help_text='Free-text kind of assistance, e.g. Seeds, Fertilizer, Cash', max_length=100)),
                ('approved', models.BooleanField(db_index=True, default=False)),
                ('approved_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('approved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='approved_allocations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'allocations',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='AllocationRecipient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('allocation', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='recipients', to='allocations.allocation')),
                ('farmer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='farmers.farmer')),
                ('organic_farmer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='farmers.organicfarmer')),
            ],
            options={
                'db_table': 'allocation_recipients',
                'constraints': [
                    models.CheckConstraint(
                        condition=(
                            models.Q(('farmer__isnull', False), ('organic_farmer__isnull', True)) |
                            models.Q(('farmer__isnull', True), ('organic_farmer__isnull', False))
                        ),
                        name='allocation_recipient_has_exactly_one_owner',
                    ),
                ],
            },
        ),
    ]
