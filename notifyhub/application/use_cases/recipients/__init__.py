"""Recipient use cases."""

from .create_recipient import create_recipient

__all__ = ["create_recipient"]
