"""
Configuration for the gate app.  This app holds the single shared admin
login that protects every staff page.  There is no user table: a
successful login only sets a flag in the server-side session.
"""

from django.apps import AppConfig


class GateConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'gate'
