"""Notification delivery and preference management service.

The presence of this file makes ``notification_center`` a regular package
instead of letting namespace package resolution pick up unrelated modules
from site-packages.
"""
