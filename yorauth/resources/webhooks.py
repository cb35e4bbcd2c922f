"""Webhook configuration endpoints.

Signature verification of incoming deliveries lives in ``yorauth.webhooks``.
"""

from typing import List, Optional

from ..types import WebhookConfig, WebhookDelivery, drop_none
from .base import AsyncResource, Resource, parse_list, unwrap


class WebhookResource(Resource):
    """Webhook operations for sync client."""

    def list(self) -> List[WebhookConfig]:
        response = self._http.request("GET", self._http.build_scoped_url("webhooks"))
        return parse_list(response, WebhookConfig.from_dict)

    def create(self, url: str, events: List[str]) -> WebhookConfig:
        """
        Create a webhook.

        The returned config carries ``secret`` for signature verification.
        It is shown only once.
        """
        response = self._http.request(
            "POST",
            self._http.build_scoped_url("webhooks"),
            body={"url": url, "events": events},
        )
        return WebhookConfig.from_dict(unwrap(response))

    def get(self, webhook_id: str) -> WebhookConfig:
        response = self._http.request("GET", self._http.build_scoped_url(f"webhooks/{webhook_id}"))
        return WebhookConfig.from_dict(unwrap(response))

    def update(
        self,
        webhook_id: str,
        url: Optional[str] = None,
        events: Optional[List[str]] = None,
        is_active: Optional[bool] = None,
    ) -> WebhookConfig:
        response = self._http.request(
            "PUT",
            self._http.build_scoped_url(f"webhooks/{webhook_id}"),
            body=drop_none({"url": url, "events": events, "is_active": is_active}),
        )
        return WebhookConfig.from_dict(unwrap(response))

    def delete(self, webhook_id: str) -> None:
        self._http.request("DELETE", self._http.build_scoped_url(f"webhooks/{webhook_id}"))

    def get_deliveries(self, webhook_id: str) -> List[WebhookDelivery]:
        """List recent delivery attempts of a webhook."""
        response = self._http.request(
            "GET", self._http.build_scoped_url(f"webhooks/{webhook_id}/deliveries")
        )
        return parse_list(response, WebhookDelivery.from_dict)


class AsyncWebhookResource(AsyncResource):
    """Webhook operations for async client."""

    async def list(self) -> List[WebhookConfig]:
        response = await self._http.request("GET", self._http.build_scoped_url("webhooks"))
        return parse_list(response, WebhookConfig.from_dict)

    async def create(self, url: str, events: List[str]) -> WebhookConfig:
        response = await self._http.request(
            "POST",
            self._http.build_scoped_url("webhooks"),
            body={"url": url, "events": events},
        )
        return WebhookConfig.from_dict(unwrap(response))

    async def get(self, webhook_id: str) -> WebhookConfig:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"webhooks/{webhook_id}")
        )
        return WebhookConfig.from_dict(unwrap(response))

    async def update(
        self,
        webhook_id: str,
        url: Optional[str] = None,
        events: Optional[List[str]] = None,
        is_active: Optional[bool] = None,
    ) -> WebhookConfig:
        response = await self._http.request(
            "PUT",
            self._http.build_scoped_url(f"webhooks/{webhook_id}"),
            body=drop_none({"url": url, "events": events, "is_active": is_active}),
        )
        return WebhookConfig.from_dict(unwrap(response))

    async def delete(self, webhook_id: str) -> None:
        await self._http.request("DELETE", self._http.build_scoped_url(f"webhooks/{webhook_id}"))

    async def get_deliveries(self, webhook_id: str) -> List[WebhookDelivery]:
        response = await self._http.request(
            "GET", self._http.build_scoped_url(f"webhooks/{webhook_id}/deliveries")
        )
        return parse_list(response, WebhookDelivery.from_dict)
