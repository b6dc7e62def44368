"""Cross-field consistency checks for ApiClientConfig.

Every rule runs; the caller gets the full list of problems rather than
the first one, so a misconfigured deployment can be fixed in one pass.
"""

from pydantic import HttpUrl, TypeAdapter, ValidationError

from bulkdata_config.descriptor.errors import ConfigProblem
from bulkdata_config.descriptor.models import ApiClientConfig, AuthType

_http_url = TypeAdapter(HttpUrl)


def is_absolute_url(value: str) -> bool:
    """True for an absolute http(s) URL with a host."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        return False
    return True


def find_problems(config: ApiClientConfig) -> list[ConfigProblem]:
    problems: list[ConfigProblem] = []

    if not config.name.strip():
        problems.append(ConfigProblem("name", "must not be empty"))

    # Auth requirements
    if config.requires_auth:
        for alias, value in (
            ("baseURL", config.base_url),
            ("tokenEndpoint", config.token_endpoint),
            ("clientId", config.client_id),
            ("clientSecret", config.client_secret),
        ):
            if not value:
                problems.append(ConfigProblem(alias, "required when requiresAuth is true"))
        if config.public:
            problems.append(ConfigProblem("public", "cannot be true when requiresAuth is true"))
    elif config.auth_type is AuthType.CLIENT_CREDENTIALS and bool(config.client_id) != bool(config.client_secret):
        missing = "clientSecret" if config.client_id else "clientId"
        problems.append(ConfigProblem(missing, "clientId and clientSecret must be set together"))

    # JWKS delivery mode
    if config.jwks_auth and config.jwks_url_auth:
        problems.append(ConfigProblem("jwksUrlAuth", "cannot be true when jwksAuth is true"))
    if config.jwks_url_auth and not config.jwks_url:
        problems.append(ConfigProblem("jwksUrl", "required when jwksUrlAuth is true"))
    if config.jwks_auth and not config.jwks:
        problems.append(ConfigProblem("jwks", "required when jwksAuth is true"))
    if not config.jwks_auth and config.jwks:
        problems.append(ConfigProblem("jwks", "must be empty when jwksAuth is false"))

    # URL shapes
    for alias, value in (
        ("baseURL", config.base_url),
        ("tokenEndpoint", config.token_endpoint),
        ("jwksUrl", config.jwks_url),
    ):
        if value and not is_absolute_url(value):
            problems.append(ConfigProblem(alias, "must be an absolute http(s) URL"))

    for alias, value in (
        ("groupExportEndpoint", config.group_export_endpoint),
        ("patientExportEndpoint", config.patient_export_endpoint),
        ("systemExportEndpoint", config.system_export_endpoint),
    ):
        if value and not value.startswith("/"):
            problems.append(ConfigProblem(alias, "must be a path starting with '/'"))

    return problems
