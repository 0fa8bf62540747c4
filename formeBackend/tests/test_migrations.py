"""
Migration Tests
===============

The suite runs with ``--nomigrations``; these tests load the real migration
modules and compare them with the models.
"""

from io import StringIO

from django.core.management import call_command
from django.db import connection
from django.db.migrations.loader import MigrationLoader
from django.test import TestCase, override_settings

LOCAL_APPS = ["accounts", "marketplace", "bookings", "activity", "chat", "waitlist"]


@override_settings(MIGRATION_MODULES={})
class MigrationsTest(TestCase):
    def test_every_app_has_an_initial_migration(self):
        loader = MigrationLoader(connection, ignore_no_migrations=True)

        for app_label in LOCAL_APPS:
            self.assertIn((app_label, "0001_initial"), loader.disk_migrations, app_label)

    def test_models_match_migrations(self):
        out = StringIO()

        try:
            call_command("makemigrations", *LOCAL_APPS, check=True, dry_run=True, stdout=out)
        except SystemExit:
            self.fail(f"Models have changes without a migration:\n{out.getvalue()}")

    def test_bookings_migrates_after_marketplace(self):
        loader = MigrationLoader(connection, ignore_no_migrations=True)

        plan = loader.graph.forwards_plan(("bookings", "0001_initial"))

        self.assertLess(plan.index(("marketplace", "0001_initial")), plan.index(("bookings", "0001_initial")))
        self.assertIn(("accounts", "0001_initial"), plan)
