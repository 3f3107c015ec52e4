"""
Shared library code for the transactions backend-for-frontend.

The FastAPI app in `api/` imports from `txn_backend` (data-service client,
query building, repositories) rather than the other way around.
"""
