"""Relay notifications to Zoom Team Chat."""
