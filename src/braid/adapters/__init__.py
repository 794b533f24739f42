"""Built-in adapters.

``mock`` echoes actions back; ``business`` is a template for a real
system and reports ``NOT_IMPLEMENTED``.
"""

from braid.adapters.base import BaseAdapter
from braid.adapters.business import BusinessAdapter
from braid.adapters.mock import MockAdapter

__all__ = ["BaseAdapter", "BusinessAdapter", "MockAdapter"]
