"""User client for the rokka service.

Creates users and manages organizations and their memberships.
"""

import requests

from rokka_client.clients.base import BaseClient
from rokka_client.core.models.errors import InvalidArgumentError
from rokka_client.core.models.user import Membership, Organization, User
from rokka_client.core.utils.constants import (
    DEFAULT_API_VERSION,
    DEFAULT_MEMBERSHIP_ROLE,
    MEMBERSHIP_ROLES,
    MEMBERSHIPS_RESOURCE,
    ORGANIZATIONS_RESOURCE,
    USERS_RESOURCE,
)


class UserClient(BaseClient):
    """Client for the user, organization and membership endpoints.

    ``create_user`` works without credentials. The other calls need the
    credentials of an existing user, see ``set_credentials``.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        api_version: int = DEFAULT_API_VERSION,
    ) -> None:
        super().__init__(session, api_version=api_version)

    def create_user(self, email: str, organization: str | None = None) -> User:
        """
        Create a user.

        Args:
            email: Email address of the new user
            organization: Optional organization to create along with the user

        Returns:
            The user, including its API key and secret
        """
        payload = {"email": email}
        if organization:
            payload["organization"] = organization

        response = self.call_checked(
            "POST",
            USERS_RESOURCE,
            needs_credentials=False,
            json=payload,
        )

        return User.from_json_response(response.content)

    def create_organization(
        self,
        name: str,
        billing_email: str,
        display_name: str = "",
    ) -> Organization:
        """Create an organization, or update it if it already exists."""
        response = self.call_checked(
            "PUT",
            f"{ORGANIZATIONS_RESOURCE}/{name}",
            json={
                "billing_email": billing_email,
                "display_name": display_name,
            },
        )

        return Organization.from_json_response(response.content)

    def get_organization(self, name: str) -> Organization:
        response = self.call_checked("GET", f"{ORGANIZATIONS_RESOURCE}/{name}")
        return Organization.from_json_response(response.content)

    def create_membership(
        self,
        organization: str,
        email: str,
        role: str = DEFAULT_MEMBERSHIP_ROLE,
    ) -> Membership:
        """
        Give a user a role within an organization.

        Raises:
            InvalidArgumentError: If the role is not one of read, write,
                upload or admin
        """
        if role not in MEMBERSHIP_ROLES:
            raise InvalidArgumentError(
                message=(
                    f'Invalid role "{role}". '
                    f"Allowed roles: {', '.join(sorted(MEMBERSHIP_ROLES))}"
                ),
                details={"role": role},
            )

        response = self.call_checked(
            "PUT",
            self._membership_path(organization, email),
            json={"role": role},
        )

        return Membership.from_json_response(response.content)

    def get_membership(self, organization: str, email: str) -> Membership:
        response = self.call_checked("GET", self._membership_path(organization, email))
        return Membership.from_json_response(response.content)

    @staticmethod
    def _membership_path(organization: str, email: str) -> str:
        return f"{ORGANIZATIONS_RESOURCE}/{organization}/{MEMBERSHIPS_RESOURCE}/{email}"
