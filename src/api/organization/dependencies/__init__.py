"""FastAPI dependency providers for the organization bounded context.

Membership checks and the tenant context come from IAM; this is the only
layer of the organization context allowed to import it.
"""
