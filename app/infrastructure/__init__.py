"""
Infrastructure layer for credential storage and token handling.

This layer contains:
- auth: Credential records, the read-only user store and the authenticator
- security: JWT issuance and validation
"""
