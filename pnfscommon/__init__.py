"""Shared record, resolution and logging helpers for pNFS data-server file tools."""
