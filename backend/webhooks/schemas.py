# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Payload sent by the Polka payment provider."""

from pydantic import BaseModel


class WebhookData(BaseModel):
    user_id: int


class PolkaWebhook(BaseModel):
    event: str
    data: WebhookData
