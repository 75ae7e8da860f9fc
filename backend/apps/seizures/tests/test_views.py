"""
API coverage for apps.seizures.views.

Covers list/filter/search, create, detail, edit, exit decisions,
notification snapshot, dashboard caching and reports.
"""

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.audit.models import AuditLog
from apps.seizures.models import Seizure
from apps.seizures.tests.helpers import make_seizure, make_user


def _create_payload(**overrides):
    payload = {
        "chassisNumber": "JT2BF28K000001",
        "make": "Toyota",
        "model": "Land Cruiser",
        "vehicleType": "4x4",
        "plateNumber": "DK-4521-A",
        "driverName": "Ibrahima Fall",
        "driverPhone": "+221 77 123 45 67",
        "infractionCode": "SMUGGLING",
        "location": "Frontière de Diama",
    }
    payload.update(overrides)
    return payload


class SeizureListTests(APITestCase):
    def setUp(self):
        self.agent = make_user("BRIGADE_AGENT")
        self.viewer = make_user("CONSULTATION_AGENT")
        self.fresh = make_seizure(self.agent, days_ago=1, make="Peugeot")
        self.warning = make_seizure(self.agent, days_ago=80, driver_name="Awa Sarr")
        self.overdue = make_seizure(self.agent, days_ago=95, status="EXIT_AUTHORIZED")
        self.client.force_authenticate(self.viewer)

    def test_list_returns_deadline_fields(self):
        response = self.client.get(reverse("seizures:list-or-create"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["count"], 3)
        levels = {row["id"]: row["deadline"]["alertLevel"] for row in body["results"]}
        self.assertEqual(levels[str(self.fresh.id)], "normal")
        self.assertEqual(levels[str(self.warning.id)], "warning")
        self.assertEqual(levels[str(self.overdue.id)], "critical")

    def test_most_recent_first(self):
        response = self.client.get(reverse("seizures:list-or-create"))
        ids = [row["id"] for row in response.json()["results"]]
        self.assertEqual(
            ids, [str(self.fresh.id), str(self.warning.id), str(self.overdue.id)]
        )

    def test_status_filter(self):
        response = self.client.get(
            reverse("seizures:list-or-create"), {"status": "EXIT_AUTHORIZED"}
        )
        results = response.json()["results"]
        self.assertEqual([row["id"] for row in results], [str(self.overdue.id)])

    def test_invalid_status_filter(self):
        response = self.client.get(
            reverse("seizures:list-or-create"), {"status": "SOLD"}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

    def test_search_is_case_insensitive(self):
        response = self.client.get(reverse("seizures:list-or-create"), {"q": "peug"})
        self.assertEqual(
            [row["id"] for row in response.json()["results"]], [str(self.fresh.id)]
        )

        response = self.client.get(reverse("seizures:list-or-create"), {"q": "SARR"})
        self.assertEqual(
            [row["id"] for row in response.json()["results"]], [str(self.warning.id)]
        )

    def test_overdue_filter(self):
        response = self.client.get(
            reverse("seizures:list-or-create"), {"overdue": "true"}
        )
        self.assertEqual(
            [row["id"] for row in response.json()["results"]], [str(self.overdue.id)]
        )

    def test_pagination_limit(self):
        response = self.client.get(reverse("seizures:list-or-create"), {"limit": 1})
        body = response.json()
        self.assertEqual(len(body["results"]), 1)
        self.assertIsNotNone(body["next"])

    def test_unauthenticated(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse("seizures:list-or-create"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.json()["error"]["code"], "UNAUTHORIZED")


class SeizureCreateViewTests(APITestCase):
    def setUp(self):
        self.agent = make_user("BRIGADE_AGENT")
        self.client.force_authenticate(self.agent)

    def test_create(self):
        response = self.client.post(
            reverse("seizures:list-or-create"), _create_payload(), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.json()["data"]
        self.assertEqual(data["chassisNumber"], "JT2BF28K000001")
        self.assertEqual(data["status"], "IN_PROGRESS")
        self.assertEqual(data["agentId"], str(self.agent.id))
        self.assertEqual(data["infractionReason"], "Contrebande (Art. 429)")
        self.assertEqual(data["deadline"]["daysSince"], 0)
        self.assertEqual(data["deadline"]["daysRemaining"], 90)

    def test_duplicate_chassis_returns_conflict(self):
        url = reverse("seizures:list-or-create")
        self.client.post(url, _create_payload(), format="json")

        response = self.client.post(url, _create_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["error"]["code"], "CONFLICT")
        self.assertEqual(
            Seizure.objects.filter(chassis_number="JT2BF28K000001").count(), 1
        )

    def test_consultation_agent_forbidden(self):
        self.client.force_authenticate(make_user("CONSULTATION_AGENT"))

        response = self.client.post(
            reverse("seizures:list-or-create"), _create_payload(), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["error"]["code"], "FORBIDDEN")
        self.assertFalse(Seizure.objects.exists())

    def test_field_errors_are_detailed(self):
        response = self.client.post(
            reverse("seizures:list-or-create"),
            _create_payload(driverPhone="abc", make=""),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        details = response.json()["error"]["details"]
        self.assertIn("driverPhone", details)
        self.assertIn("make", details)

    def test_other_reason_without_detail(self):
        response = self.client.post(
            reverse("seizures:list-or-create"),
            _create_payload(infractionCode="OTHER"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("infractionDetail", response.json()["error"]["details"])

    def test_chassis_too_long(self):
        response = self.client.post(
            reverse("seizures:list-or-create"),
            _create_payload(chassisNumber="X" * 101),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class SeizureDetailViewTests(APITestCase):
    def setUp(self):
        self.owner = make_user("BRIGADE_AGENT")
        self.other = make_user("BRIGADE_AGENT")
        self.seizure = make_seizure(self.owner, days_ago=91)
        self.url = reverse("seizures:detail", args=[self.seizure.id])

    def test_detail(self):
        self.client.force_authenticate(make_user("CONSULTATION_AGENT"))

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()["data"]
        self.assertEqual(data["driverPhone"], self.seizure.driver_phone)
        self.assertEqual(data["deadline"]["alertLevel"], "critical")
        self.assertEqual(data["deadline"]["daysRemaining"], -1)

    def test_detail_not_found(self):
        self.client.force_authenticate(self.owner)
        response = self.client.get(
            reverse("seizures:detail", args=["00000000-0000-0000-0000-000000000000"])
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["error"]["code"], "NOT_FOUND")

    def test_owner_patch(self):
        self.client.force_authenticate(self.owner)

        response = self.client.patch(self.url, {"model": "Prado"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["data"]["model"], "Prado")

    def test_other_agent_patch_forbidden(self):
        self.client.force_authenticate(self.other)

        response = self.client.patch(self.url, {"model": "Prado"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_consultation_patch_forbidden(self):
        self.client.force_authenticate(make_user("CONSULTATION_AGENT"))
        response = self.client.patch(self.url, {"model": "Prado"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_patch_chassis_change_rejected(self):
        self.client.force_authenticate(self.owner)
        response = self.client.patch(
            self.url, {"chassisNumber": "OTHERCHASSIS"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_patch_after_exit_is_invalid_state(self):
        self.client.force_authenticate(make_user("ADMIN"))
        self.client.post(reverse("seizures:validate-exit", args=[self.seizure.id]))

        response = self.client.patch(self.url, {"model": "Prado"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["error"]["code"], "INVALID_STATE")


class ExitDecisionViewTests(APITestCase):
    def setUp(self):
        self.agent = make_user("BRIGADE_AGENT")
        self.seizure = make_seizure(self.agent)

    def test_admin_validate_exit(self):
        self.client.force_authenticate(make_user("ADMIN"))

        response = self.client.post(
            reverse("seizures:validate-exit", args=[self.seizure.id])
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["data"]["status"], "EXIT_AUTHORIZED")
        self.assertEqual(
            AuditLog.objects.filter(
                seizure=self.seizure, action="EXIT_VALIDATION"
            ).count(),
            1,
        )

    def test_bureau_chief_cancel(self):
        self.client.force_authenticate(make_user("BUREAU_CHIEF"))

        response = self.client.post(reverse("seizures:cancel", args=[self.seizure.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["data"]["status"], "EXIT_PERFORMED")

    def test_agent_cannot_validate(self):
        self.client.force_authenticate(self.agent)

        response = self.client.post(
            reverse("seizures:validate-exit", args=[self.seizure.id])
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.seizure.refresh_from_db()
        self.assertEqual(self.seizure.status, "IN_PROGRESS")

    def test_validate_missing_seizure(self):
        self.client.force_authenticate(make_user("BRIGADE_CHIEF"))
        response = self.client.post(
            reverse(
                "seizures:validate-exit",
                args=["00000000-0000-0000-0000-000000000000"],
            )
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class NotificationViewTests(APITestCase):
    def test_notification_snapshot(self):
        agent = make_user("BRIGADE_AGENT", first_name="Fatou", last_name="Ba")
        seizure = make_seizure(agent, days_ago=10)
        self.client.force_authenticate(make_user("CONSULTATION_AGENT"))

        response = self.client.get(
            reverse("seizures:notification", args=[seizure.id])
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()["data"]
        self.assertEqual(data["agentName"], "Fatou Ba")
        self.assertEqual(data["deadline"]["daysRemaining"], 80)
        self.assertIn("deadlineDate", data)


class DashboardViewTests(APITestCase):
    def setUp(self):
        self.agent = make_user("BRIGADE_AGENT")
        make_seizure(self.agent, days_ago=0)
        make_seizure(self.agent, days_ago=76)
        make_seizure(self.agent, days_ago=120, status="EXIT_PERFORMED")
        self.client.force_authenticate(make_user("CONSULTATION_AGENT"))

    def test_dashboard_counts(self):
        response = self.client.get(reverse("seizures:dashboard"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()["data"]
        self.assertEqual(data["inProgressCount"], 2)
        self.assertEqual(data["overdueCount"], 1)
        self.assertEqual(data["warningCount"], 1)
        self.assertGreaterEqual(data["monthCount"], 1)
        self.assertEqual(len(data["recent"]), 3)

    def test_dashboard_is_cached_until_mutation(self):
        url = reverse("seizures:dashboard")
        self.client.get(url)

        # Direct insert does not go through the service layer: still cached
        make_seizure(self.agent)
        self.assertEqual(self.client.get(url).json()["data"]["inProgressCount"], 2)

        self.client.force_authenticate(self.agent)
        with self.captureOnCommitCallbacks(execute=True):
            self.client.post(
                reverse("seizures:list-or-create"), _create_payload(), format="json"
            )

        self.assertEqual(self.client.get(url).json()["data"]["inProgressCount"], 4)


class ReportViewTests(APITestCase):
    def setUp(self):
        self.agent = make_user("BRIGADE_AGENT")
        make_seizure(self.agent, infraction_reason="Contrebande (Art. 429)")
        make_seizure(self.agent, infraction_reason="Défaut de T1")

    def test_report_requires_chief(self):
        self.client.force_authenticate(self.agent)
        response = self.client.get(reverse("seizures:reports"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_report_current_year(self):
        self.client.force_authenticate(make_user("BRIGADE_CHIEF"))

        response = self.client.get(reverse("seizures:reports"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()["data"]
        self.assertEqual(data["total"], 2)
        self.assertEqual(data["topAgents"][0]["count"], 2)
        self.assertIn(data["year"], data["availableYears"])

    def test_invalid_year(self):
        self.client.force_authenticate(make_user("ADMIN"))
        response = self.client.get(reverse("seizures:reports"), {"year": "abc"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_export_rows(self):
        self.client.force_authenticate(make_user("BUREAU_CHIEF"))

        response = self.client.get(reverse("seizures:reports-export"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        rows = response.json()["data"]["rows"]
        self.assertEqual(len(rows), 2)
        self.assertEqual(
            set(rows[0]), {"chassisNumber", "make", "model", "seizedAt", "status"}
        )
