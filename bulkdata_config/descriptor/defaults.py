"""Compiled-in literals for the CMS Beneficiary Claims Data API (BCDA)."""

# Suffixes appended to BASE_URL; the relation is kept, not the final value
API_PATH = "/api/v1"
TOKEN_PATH = "/auth/token"

# Marks an optional capability as switched off
DISABLED = ""

BCDA_DESCRIPTION = (
    "The Beneficiary Claims Data API (BCDA) enables Accountable Care Organizations "
    "(ACOs) participating in the Shared Savings Program to retrieve Medicare Part A, "
    "Part B, and Part D claims data for their prospectively assigned or assignable "
    "beneficiaries."
)

BCDA_DEFAULTS: dict = {
    "auth_type": "client-credentials",
    "description": BCDA_DESCRIPTION,
    "fastest_resource": "Patient",
    "group_export_endpoint": "/Group/all/$export",
    "jwks": {},
    "jwks_auth": False,
    "jwks_url": "http://localhost:3000/jwks",
    "jwks_url_auth": False,
    "name": "CMS Beneficiary Claims Data API (BCDA)",
    "patient_export_endpoint": "/Patient/$export",
    "public": False,
    "requires_auth": True,
    "since_param": "_since",
    "strict_ssl": True,
    "system_export_endpoint": DISABLED,
}
