"""Payment gateway adapters.

Import concrete gateways from their modules; the Razorpay adapter pulls in
aiohttp.
"""

__all__ = []
