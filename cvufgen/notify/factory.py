"""Builds collaborators from notification settings."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from ..config import NotificationConfig
from .base import Collaborator, NoOpCollaborator, WebhookCollaborator
from .email import EmailCollaborator


@dataclass
class Collaborators:
    """The three outbound collaborators used after each request."""

    sheet: Collaborator
    chat: Collaborator
    email: Collaborator

    @classmethod
    def disabled(cls) -> "Collaborators":
        return cls(
            sheet=NoOpCollaborator("sheet"),
            chat=NoOpCollaborator("chat"),
            email=NoOpCollaborator("email"),
        )


def build_collaborators(
    config: NotificationConfig,
    *,
    client: httpx.AsyncClient | None = None,
) -> Collaborators:
    """Return live collaborators where configured and no-ops elsewhere."""
    sheet: Collaborator = NoOpCollaborator("sheet")
    chat: Collaborator = NoOpCollaborator("chat")
    email: Collaborator = NoOpCollaborator("email")
    if config.sheet_webhook_url:
        sheet = WebhookCollaborator("sheet", config.sheet_webhook_url, timeout=config.timeout, client=client)
    if config.chat_webhook_url:
        chat = WebhookCollaborator("chat", config.chat_webhook_url, timeout=config.timeout, client=client)
    if config.email_api_key and config.email_from:
        email = EmailCollaborator(
            config.email_api_key, config.email_from, timeout=config.timeout, client=client
        )
    return Collaborators(sheet=sheet, chat=chat, email=email)


__all__ = ["Collaborators", "build_collaborators"]
