"""Operations package for TrueLayer API calls.

Contains one module per API resource:
- ``merchant``: Configured merchant account details (local, no HTTP)
- ``payments``: Payment lookups
- ``payouts``: Payout creation and lookups
- ``payment_links``: Payment link creation and lookups
- ``transactions``: Merchant account transaction listing
- ``common``: Shared path and timestamp helpers
"""
