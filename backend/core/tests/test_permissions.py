"""
Role policy table: every (role, action) pair.
"""

from types import SimpleNamespace

from django.test import SimpleTestCase

from core.permissions import ALL_ROLES, Action, ROLE_POLICY, is_allowed, user_can

EXPECTED = {
    Action.VIEW_SEIZURES: set(ALL_ROLES),
    Action.CREATE_SEIZURE: {"ADMIN", "BUREAU_CHIEF", "BRIGADE_CHIEF", "BRIGADE_AGENT"},
    Action.EDIT_SEIZURE: {"ADMIN", "BUREAU_CHIEF", "BRIGADE_CHIEF", "BRIGADE_AGENT"},
    Action.EDIT_ANY_SEIZURE: {"ADMIN"},
    Action.MANAGE_EXIT: {"ADMIN", "BUREAU_CHIEF", "BRIGADE_CHIEF"},
    Action.VIEW_REPORTS: {"ADMIN", "BUREAU_CHIEF", "BRIGADE_CHIEF"},
    Action.MANAGE_USERS: {"ADMIN"},
    Action.VIEW_AUDIT_LOG: {"ADMIN"},
}


class RolePolicyTests(SimpleTestCase):
    def test_full_table(self):
        self.assertEqual(set(ROLE_POLICY), set(EXPECTED))
        for action, allowed in EXPECTED.items():
            for role in ALL_ROLES:
                with self.subTest(action=action, role=role):
                    self.assertEqual(is_allowed(role, action), role in allowed)

    def test_unknown_role_denied_everything(self):
        for action in EXPECTED:
            self.assertFalse(is_allowed("SUPERVISOR", action))
            self.assertFalse(is_allowed(None, action))

    def test_unknown_action_denied(self):
        self.assertFalse(is_allowed("ADMIN", "DELETE_EVERYTHING"))

    def test_user_can_requires_authenticated_user(self):
        anonymous = SimpleNamespace(is_authenticated=False, role="ADMIN")
        admin = SimpleNamespace(is_authenticated=True, role="ADMIN")

        self.assertFalse(user_can(anonymous, Action.MANAGE_USERS))
        self.assertFalse(user_can(None, Action.MANAGE_USERS))
        self.assertTrue(user_can(admin, Action.MANAGE_USERS))
