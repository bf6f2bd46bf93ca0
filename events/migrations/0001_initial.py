import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(help_text='What is happening', max_length=200)),
                ('location', models.CharField(help_text='Where it happens', max_length=255)),
                ('note', models.TextField(blank=True)),
                ('image', models.TextField(blank=True, help_text='Optional inline data URL')),
                ('event_date', models.DateTimeField(db_index=True)),
                ('for_farmers', models.BooleanField(default=True)),
                ('for_organic_farmers', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_events', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'events',
                'ordering': ['-event_date'],
            },
        ),
    ]
