"""SAML single sign-on."""

from typing import List, Optional

from ..types import SamlConnection, SamlInitiateResponse, drop_none
from .base import AsyncResource, Resource, parse_list, unwrap


class SamlResource(Resource):
    """SAML operations for sync client."""

    def initiate(
        self,
        connection_id: Optional[str] = None,
        email: Optional[str] = None,
        relay_state: Optional[str] = None,
    ) -> SamlInitiateResponse:
        """
        Start a SAML login.

        Pass ``connection_id`` to pick a connection explicitly, or ``email``
        to route by the user's domain. Redirect the user to
        ``result.redirect_url``.
        """
        response = self._http.request(
            "POST",
            self._http.build_scoped_url("saml/initiate"),
            body=drop_none({
                "connection_id": connection_id,
                "email": email,
                "relay_state": relay_state,
            }),
        )
        return SamlInitiateResponse.from_dict(unwrap(response))

    def get_connections(self) -> List[SamlConnection]:
        response = self._http.request("GET", self._http.build_scoped_url("saml/connections"))
        return parse_list(response, SamlConnection.from_dict)


class AsyncSamlResource(AsyncResource):
    """SAML operations for async client."""

    async def initiate(
        self,
        connection_id: Optional[str] = None,
        email: Optional[str] = None,
        relay_state: Optional[str] = None,
    ) -> SamlInitiateResponse:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url("saml/initiate"),
            body=drop_none({
                "connection_id": connection_id,
                "email": email,
                "relay_state": relay_state,
            }),
        )
        return SamlInitiateResponse.from_dict(unwrap(response))

    async def get_connections(self) -> List[SamlConnection]:
        response = await self._http.request("GET", self._http.build_scoped_url("saml/connections"))
        return parse_list(response, SamlConnection.from_dict)
