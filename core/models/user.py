"""
user.py

Defines the authenticated user session consumed by features.

The session is issued by the host application (login is out of scope here);
features only read it. Values compare by content so a re-login with the same
identity and endpoint is not treated as a change.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserSession:
    """
    Identity and endpoint context of the acting user.

    :param current_user_login: Login used for audit payloads and service calls
    :param current_user_name: Display/user name compared against record owners
    :param organization: Organization name, shown when a record has no channel source
    :param client_url: Endpoint of the document service for this client
    """

    current_user_login: str
    current_user_name: str
    organization: str = ""
    client_url: str = ""

    def __str__(self) -> str:
        return f"UserSession({self.current_user_login}): {self.current_user_name} @ {self.client_url or 'n/a'}"
