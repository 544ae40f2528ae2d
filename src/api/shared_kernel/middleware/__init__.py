"""Tenant context types shared across bounded contexts.

The tenant context of a request is resolved from the access token (read
from the Authorization header or the access token cookie) combined with
the signed active-tenant preference cookie. Request headers never name
the tenant. Resolution itself lives in the IAM context; this package
only holds the result types and their probe.
"""
