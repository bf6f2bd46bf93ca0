import django.db.models.deletion
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
            name='Concern',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField()),
                ('image', models.TextField(blank=True, help_text='Optional inline data URL')),
                ('status', models.CharField(choices=[('OPEN', 'Open'), ('IN_PROGRESS', 'In Progress'), ('RESOLVED', 'Resolved'), ('CLOSED', 'Closed')], db_index=True, default='OPEN', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True, db_index=True, help_text='Bumped whenever a message is added')),
                ('farmer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='concerns', to='farmers.farmer')),
                ('organic_farmer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='concerns', to='farmers.organicfarmer')),
            ],
            options={
                'db_table': 'farmer_concerns',
                'ordering': ['-updated_at'],
                'indexes': [models.Index(fields=['status', 'updated_at'], name='concern_status_updated_idx')],
                'constraints': [
                    models.CheckConstraint(
                        condition=(
                            models.Q(('farmer__isnull', False), ('organic_farmer__isnull', True)) |
                            models.Q(('farmer__isnull', True), ('organic_farmer__isnull', False))
                        ),
                        name='concern_has_exactly_one_owner',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='ConcernMessage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sender_type', models.CharField(choices=[('ADMIN', 'Administrator'), ('FARMER', 'Farmer'), ('ORGANIC_FARMER', 'Organic Farmer')], db_index=True, max_length=20)),
                ('content', models.TextField()),
                ('image', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('concern', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='messages', to='concerns.concern')),
                ('sender', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='concern_messages', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'concern_messages',
                'ordering': ['created_at', 'id'],
            },
        ),
    ]
