"""
Notification channels (WhatsApp, email).
"""
