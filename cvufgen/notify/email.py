"""Requester email carrying the generated document and artifacts."""

from __future__ import annotations

import base64
import re
from typing import Any, Dict, Mapping, Optional

import httpx

from ..models import GenerationResult, IntakeRequest
from .base import post_json

SENDGRID_ENDPOINT = "https://api.sendgrid.com/v3/mail/send"

_SLUG_NOISE = re.compile(r"[^a-z0-9]+")


class EmailCollaborator:
    """Sends mail through the SendGrid v3 mail-send API."""

    enabled = True

    def __init__(
        self,
        api_key: str,
        sender: str,
        *,
        name: str = "email",
        endpoint: str = SENDGRID_ENDPOINT,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.name = name
        self.api_key = api_key
        self.sender = sender
        self.endpoint = endpoint
        self.timeout = timeout
        self._client = client

    async def send(self, payload: Mapping[str, Any]) -> None:
        message = dict(payload)
        message.setdefault("from", {"email": self.sender})
        await post_json(
            self.name,
            self.endpoint,
            message,
            timeout=self.timeout,
            headers={"Authorization": f"Bearer {self.api_key}"},
            client=self._client,
        )


def build_email_message(request: IntakeRequest, result: GenerationResult) -> Optional[Dict[str, Any]]:
    """Return the mail-send body for the requester, or None without an address."""
    if not request.user_email:
        return None
    app_name = request.microapp_name or "Your microapp"
    recipient: Dict[str, str] = {"email": request.user_email}
    if request.user_name:
        recipient["name"] = request.user_name

    body = "\n\n".join(
        (
            f"Hi {request.user_name or 'there'},",
            f"Your CVUF file for \"{app_name}\" is attached and ready to import.",
            f"Estimated build time: {result.build_time}",
            f"## Dependencies\n{result.dependencies}",
            result.setup_guide,
            result.pitch_points,
            f"Request ID: {result.request_id}",
        )
    )
    attachment = base64.b64encode(result.document_text.encode("utf-8")).decode("ascii")
    return {
        "personalizations": [{"to": [recipient]}],
        "subject": f"Your microapp is ready: {app_name}",
        "content": [{"type": "text/plain", "value": body}],
        "attachments": [
            {
                "content": attachment,
                "type": "application/json",
                "filename": f"{_slugify(app_name)}.cvuf.json",
                "disposition": "attachment",
            }
        ],
    }


def _slugify(name: str) -> str:
    slug = _SLUG_NOISE.sub("-", name.lower()).strip("-")
    return slug or "microapp"


__all__ = ["EmailCollaborator", "SENDGRID_ENDPOINT", "build_email_message"]
