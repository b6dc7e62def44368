"""Builds the API client descriptor from an environment snapshot.

`build_config` is pure: the same snapshot always yields an equal
descriptor. `get_config` wraps it into the process-wide singleton read
once at startup.
"""

import copy
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from bulkdata_config.config.settings import Settings, get_settings
from bulkdata_config.descriptor.defaults import API_PATH, BCDA_DEFAULTS, TOKEN_PATH
from bulkdata_config.descriptor.errors import ConfigProblem, ConfigurationError
from bulkdata_config.descriptor.models import ApiClientConfig
from bulkdata_config.descriptor.validation import find_problems, is_absolute_url
from bulkdata_config.logging.audit import get_audit_logger

# Descriptor fields computed from BASE_URL
_DERIVED_FIELDS = ("baseURL", "tokenEndpoint")


def build_config(
    env: Mapping[str, str], defaults: Mapping[str, Any] = BCDA_DEFAULTS
) -> ApiClientConfig:
    """Interpolate the compiled-in literals with BASE_URL, CLIENT_ID and CLIENT_SECRET.

    Unset variables resolve to "". An empty BASE_URL leaves base_url and
    token_endpoint empty instead of producing a relative path.

    Raises:
        ConfigurationError: listing every inconsistent or missing field.
    """
    base = env.get("BASE_URL") or ""
    problems: list[ConfigProblem] = []
    if base and not is_absolute_url(base):
        problems.append(ConfigProblem("BASE_URL", f"must be an absolute http(s) URL, got {base!r}"))

    fields = copy.deepcopy(dict(defaults))
    fields.update(
        base_url=_derive(base, API_PATH),
        token_endpoint=_derive(base, TOKEN_PATH),
        client_id=env.get("CLIENT_ID") or "",
        client_secret=env.get("CLIENT_SECRET") or "",
    )

    try:
        config = ApiClientConfig(**fields)
    except ValidationError as e:
        problems.extend(_problems_from(e))
        raise ConfigurationError(problems) from e

    found = find_problems(config)
    if problems:
        # BASE_URL was already rejected; its derived URLs would repeat the same fault
        found = [p for p in found if p.field not in _DERIVED_FIELDS]
    problems.extend(found)
    if problems:
        raise ConfigurationError(problems)
    return config


def load_config(settings: Settings | None = None) -> ApiClientConfig:
    """Build the descriptor from process settings, logging the outcome."""
    settings = settings or get_settings()
    logger = get_audit_logger()

    try:
        config = build_config(settings.environment)
    except ConfigurationError as e:
        logger.error(
            "Configuration rejected",
            extra={"audit_data": {
                "event": "config.rejected",
                "problem_count": len(e.problems),
                "fields": e.fields,
                "problems": [str(p) for p in e.problems],
            }},
        )
        raise

    logger.info(
        "Configuration loaded",
        extra={"audit_data": {
            "event": "config.loaded",
            "api": config.name,
            "auth_type": config.auth_type.value,
            "jwks_mode": config.jwks_mode.value,
            "exports": [k.value for k in config.enabled_exports],
            "descriptor": config.redacted(),
        }},
    )
    return config


@lru_cache
def get_config() -> ApiClientConfig:
    return load_config()


def _derive(base: str, path: str) -> str:
    return f"{base}{path}" if base else ""


def _problems_from(error: ValidationError) -> list[ConfigProblem]:
    problems = []
    for err in error.errors():
        field = ".".join(str(part) for part in err["loc"]) or "descriptor"
        problems.append(ConfigProblem(field, err["msg"]))
    return problems
