"""Outbound message chunking and delivery"""

from .chunker import split_message, DEFAULT_MAX_LENGTH
from .delivery import DeliveryPipeline, NO_RESPONSE_NOTICE, strip_markup

__all__ = [
    'split_message',
    'DEFAULT_MAX_LENGTH',
    'DeliveryPipeline',
    'NO_RESPONSE_NOTICE',
    'strip_markup',
]
