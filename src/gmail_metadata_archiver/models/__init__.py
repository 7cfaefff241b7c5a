"""Data models for Gmail Metadata Archiver.

This module contains Pydantic models for data validation and serialization.
"""

from gmail_metadata_archiver.models.message_record import MessageHeader, MessageRecord

__all__ = ["MessageHeader", "MessageRecord"]
