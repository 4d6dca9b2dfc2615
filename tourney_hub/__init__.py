"""Tourney Hub notification service and synchronization client."""
