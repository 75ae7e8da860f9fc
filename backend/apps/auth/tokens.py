"""
Token issuing. Every token carries the user's role as a claim; access
tokens derived from a refresh token inherit it.
"""

from rest_framework_simplejwt.tokens import RefreshToken

from core.authentication import ROLE_CLAIM


def issue_tokens(user):
    """Return (refresh, access) token strings for ``user``."""
    refresh = RefreshToken.for_user(user)
    refresh[ROLE_CLAIM] = user.role
    return str(refresh), str(refresh.access_token)
