from django.conf import settings
from django.db import models


class Event(models.Model):
    """
    An announced event.

    The visibility flags decide which farmer logins see it; administrators
    always see everything.
    """

    title = models.CharField(max_length=200, help_text="What is happening")
    location = models.CharField(max_length=255, help_text="Where it happens")
    note = models.TextField(blank=True)
    image = models.TextField(blank=True, help_text="Optional inline data URL")
    event_date = models.DateTimeField(db_index=True)

    for_farmers = models.BooleanField(default=True)
    for_organic_farmers = models.BooleanField(default=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_events'
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'events'
        ordering = ['-event_date']

    def __str__(self):
        return f"{self.title} @ {self.location} ({self.event_date:%Y-%m-%d})"
