"""CLI command modules organized by resource kind.

Command Groups:
- deployable: Gate checks, family inspection, projection and promotion
- channel: Channel listing and cleanup
"""

from .channel import channel_app
from .deployable import deployable_app

__all__ = [
    "channel_app",
    "deployable_app",
]
