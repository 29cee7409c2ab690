"""Telegram bot presentation layer."""
