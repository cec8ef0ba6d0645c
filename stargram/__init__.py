"""Relay GitHub star webhooks to a Telegram chat."""
