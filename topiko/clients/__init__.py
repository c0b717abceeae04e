"""API clients for external services.

Each client follows the same pattern:
- Accepts credentials in __init__
- Exposes an `is_available` property (True when credentials are set)
- Degrades to a mock or offline mode when credentials are missing
- Uses httpx for real HTTP calls
"""

from topiko.clients.magictext import MagicTextClient, SmsDeliveryError
from topiko.clients.supabase import SupabaseClient

__all__ = [
    "MagicTextClient",
    "SmsDeliveryError",
    "SupabaseClient",
]
