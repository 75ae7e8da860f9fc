from django.test import TestCase

from apps.audit.models import AuditLog
from apps.audit.services import create_audit_entry
from apps.seizures.tests.helpers import make_user
from core.exceptions import NotFoundError


class AuditLogImmutabilityTests(TestCase):
    def setUp(self):
        self.user = make_user("ADMIN")
        self.log = create_audit_entry(
            action="USER_CREATION", actor_id=self.user.id, details="initial"
        )

    def test_instance_update_is_blocked(self):
        self.log.details = "rewritten"
        with self.assertRaises(ValueError):
            self.log.save()

    def test_instance_delete_is_blocked(self):
        with self.assertRaises(ValueError):
            self.log.delete()

    def test_bulk_update_is_blocked(self):
        with self.assertRaises(ValueError):
            AuditLog.objects.filter(pk=self.log.pk).update(action="MODIFIED")

    def test_bulk_delete_is_blocked(self):
        with self.assertRaises(ValueError):
            AuditLog.objects.filter(pk=self.log.pk).delete()

    def test_entry_is_unchanged(self):
        self.log.refresh_from_db()
        self.assertEqual(self.log.details, "initial")


class CreateAuditEntryTests(TestCase):
    def test_actor_is_required(self):
        with self.assertRaises(NotFoundError):
            create_audit_entry(
                action="USER_CREATION",
                actor_id="00000000-0000-0000-0000-000000000000",
            )

    def test_request_id_is_recorded(self):
        from core.middleware import _request_id_ctx

        user = make_user("ADMIN")
        token = _request_id_ctx.set("req-123")
        try:
            entry = create_audit_entry(action="USER_CREATION", actor_id=user.id)
        finally:
            _request_id_ctx.reset(token)

        self.assertEqual(entry.request_id, "req-123")
