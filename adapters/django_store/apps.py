"""
TrackSure Django Store - App Configuration
===========================================
Persistent custody state: participants, products, transfer entries.
"""

from django.apps import AppConfig


class DjangoStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "adapters.django_store"
    label = "tracksure_store"
    verbose_name = "TrackSure Custody Store"
