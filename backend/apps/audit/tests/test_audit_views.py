"""
API coverage for apps.audit.views.

Covers audit log query (filters, pagination, permission) and export.
"""

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.audit.services import create_audit_entry
from apps.seizures import services as seizure_services
from apps.seizures.tests.helpers import make_seizure, make_user, seizure_fields


class AuditViewTests(APITestCase):
    def setUp(self):
        self.admin = make_user("ADMIN", first_name="Mariama", last_name="Diop")
        self.chief = make_user("BRIGADE_CHIEF", first_name="Cheikh", last_name="Ndiaye")
        self.agent = make_user("BRIGADE_AGENT")
        self.seizure = seizure_services.create_seizure(
            self.agent.id, **seizure_fields(chassis_number="AUDIT0000000001")
        )
        seizure_services.validate_exit(self.seizure.id, self.chief.id)
        self.client.force_authenticate(self.admin)

    def test_audit_list(self):
        response = self.client.get(reverse("audit:query-audit-log"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["count"], 2)
        latest = body["results"][0]
        self.assertEqual(latest["action"], "EXIT_VALIDATION")
        self.assertEqual(latest["actorName"], "Cheikh Ndiaye")
        self.assertEqual(latest["chassisNumber"], "AUDIT0000000001")

    def test_filter_by_user_name(self):
        response = self.client.get(reverse("audit:query-audit-log"), {"user": "ndiaye"})
        actions = [row["action"] for row in response.json()["results"]]
        self.assertEqual(actions, ["EXIT_VALIDATION"])

    def test_filter_by_action_substring(self):
        response = self.client.get(
            reverse("audit:query-audit-log"), {"action": "creation"}
        )
        actions = [row["action"] for row in response.json()["results"]]
        self.assertEqual(actions, ["SEIZURE_CREATION"])

    def test_filter_by_seizure(self):
        other = make_seizure(self.agent)
        create_audit_entry(
            action="SEIZURE_UPDATE", actor_id=self.agent.id, seizure_id=other.id
        )

        response = self.client.get(
            reverse("audit:query-audit-log"), {"seizureId": str(other.id)}
        )

        self.assertEqual(response.json()["count"], 1)

    def test_filter_by_date_range(self):
        future = (timezone.now() + timedelta(days=1)).isoformat()
        response = self.client.get(
            reverse("audit:query-audit-log"), {"fromDate": future}
        )
        self.assertEqual(response.json()["count"], 0)

    def test_invalid_seizure_id(self):
        response = self.client.get(
            reverse("audit:query-audit-log"), {"seizureId": "not-a-uuid"}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_date(self):
        response = self.client.get(
            reverse("audit:query-audit-log"), {"toDate": "yesterday"}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_export(self):
        response = self.client.get(reverse("audit:export-audit-log"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        rows = response.json()["data"]
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0]["user"]["lastName"], "Ndiaye")
        self.assertTrue(rows[0]["details"])

    def test_non_admin_forbidden(self):
        self.client.force_authenticate(self.chief)
        for name in ("audit:query-audit-log", "audit:export-audit-log"):
            response = self.client.get(reverse(name))
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_audit_unauthorized(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse("audit:query-audit-log"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
