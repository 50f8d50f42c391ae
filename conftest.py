"""
Root pytest configuration.

Unmanaged models map to existing Supabase tables, so Django never creates
them. Tests flip them to managed=True and sync the schema directly.
"""
import pytest
from django.apps import apps


@pytest.fixture(scope='session')
def django_db_setup(django_db_setup, django_db_blocker):
    """
    Create tables for unmanaged models after the test database exists.
    """
    with django_db_blocker.unblock():
        unmanaged = [model for model in apps.get_models() if not model._meta.managed]
        for model in unmanaged:
            model._meta.managed = True

        from django.db import connection

        with connection.schema_editor() as schema_editor:
            for model in unmanaged:
                schema_editor.create_model(model)
