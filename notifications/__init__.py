"""
Notifications module - transactional emails.

This module handles:
- EmailSender port and its Django mail implementation
- NotificationTrigger used by webhook processors and event handlers
- Email templates for purchase, renewal, payment and license events
"""
