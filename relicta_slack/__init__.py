"""relicta-slack — Slack release notifications for Relicta."""

__version__ = "2.0.0"
