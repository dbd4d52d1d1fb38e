# ABOUTME: Wiki publishing service
# ABOUTME: MediaWiki login and edit for the extremes artifact page

from .publisher import PublishError, WikiPublisher

__all__ = [
    "PublishError",
    "WikiPublisher",
]
