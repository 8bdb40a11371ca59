"""Delivery channel identifiers."""

CHANNEL_EMAIL = "EMAIL"
CHANNEL_SMS = "SMS"

DELIVERY_CHANNELS = (CHANNEL_EMAIL, CHANNEL_SMS)

__all__ = ["CHANNEL_EMAIL", "CHANNEL_SMS", "DELIVERY_CHANNELS"]
