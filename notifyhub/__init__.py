"""NotifyHub: multi-channel notification dispatcher."""

__version__ = "1.0.0"
