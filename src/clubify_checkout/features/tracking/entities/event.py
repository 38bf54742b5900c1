"""Tracking event record."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ....core.data import BaseData

NAVIGATION_EVENTS = [
    "page_view", "page_load", "page_exit", "navigation_click",
    "external_link_click", "scroll_depth", "time_on_page",
]
INTERACTION_EVENTS = [
    "button_click", "form_start", "form_submit", "form_abandon", "form_error",
    "form_interaction", "modal_open", "modal_close", "video_play", "video_pause",
    "video_complete", "search_performed", "filter_applied",
]
CONVERSION_EVENTS = [
    "lead_generated", "signup_started", "signup_completed",
    "subscription_created", "subscription_cancelled",
    "purchase_initiated", "purchase_completed", "purchase_failed",
    "checkout_started", "checkout_completed", "checkout_abandoned",
    "add_to_cart", "remove_from_cart",
]
EVENT_TYPES = NAVIGATION_EVENTS + INTERACTION_EVENTS + CONVERSION_EVENTS

ENGAGEMENT_EVENTS = [
    "page_view", "button_click", "form_interaction",
    "video_play", "scroll_depth", "time_on_page",
]
REVENUE_EVENTS = ["purchase_completed", "checkout_completed", "subscription_created", "lead_generated"]


@dataclass
class TrackingEventData(BaseData):
    """One behavioural event recorded for a checkout session."""

    RULES = {
        "event_type": ["required", "string", ["min", 1], ["max", 100], ["in", EVENT_TYPES]],
        "timestamp": ["required", "date"],
        "session_id": ["required", "string"],
        "user_id": ["string"],
        "customer_id": ["string"],
        "page_url": ["string", ["max", 2048]],
        "referrer": ["string", ["max", 2048]],
        "user_agent": ["string", ["max", 512]],
        "ip_address": ["string", ["max", 45]],
        "organization_id": ["string"],
        "metadata": ["array"],
        "utm_params": ["array"],
        "device_info": ["array"],
    }

    event_type: Optional[str] = None
    timestamp: Optional[str] = None
    session_id: Optional[str] = None
    user_id: Optional[str] = None
    customer_id: Optional[str] = None
    page_url: Optional[str] = None
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    organization_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    utm_params: Optional[Dict[str, Any]] = None
    device_info: Optional[Dict[str, Any]] = None

    def is_conversion(self) -> bool:
        return self.event_type in REVENUE_EVENTS

    def is_engagement(self) -> bool:
        return self.event_type in ENGAGEMENT_EVENTS

    def get_value(self) -> Optional[float]:
        metadata = self.metadata or {}
        value = metadata.get("value", metadata.get("amount"))
        return float(value) if value is not None else None

    def get_utm_source(self) -> Optional[str]:
        return (self.utm_params or {}).get("utm_source")

    def dedupe_key(self) -> tuple:
        return (self.event_type, self.session_id, self.timestamp, self.page_url)
