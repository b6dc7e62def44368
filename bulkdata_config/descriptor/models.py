"""Typed, immutable descriptor for one Bulk Data API integration.

Attributes are snake_case; aliases carry the camelCase keys of the
Bulk Data Tester `config.js` shape so the record can be handed to the
harness unchanged via `as_bdt_config()`.
"""

import json
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any
from urllib.parse import urlencode

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer

from bulkdata_config.descriptor.defaults import DISABLED
from bulkdata_config.descriptor.errors import ConfigProblem, ConfigurationError


class AuthType(str, Enum):
    CLIENT_CREDENTIALS = "client-credentials"
    PUBLIC = "public"
    NONE = "none"


class ExportKind(str, Enum):
    PATIENT = "patient"
    GROUP = "group"
    SYSTEM = "system"


class JwksMode(str, Enum):
    NONE = "none"
    INLINE = "inline"  # keys embedded in `jwks`
    URL = "url"        # keys published at `jwks_url`


def _freeze(value: Any) -> Any:
    """Read-only copy: mappings become MappingProxyType, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


# JSON key material, frozen all the way down once validated
FrozenJson = Annotated[
    dict[str, Any],
    AfterValidator(_freeze),
    PlainSerializer(_thaw, return_type=dict),
]


_EXPORT_ENDPOINTS = {
    ExportKind.PATIENT: ("patient_export_endpoint", "patientExportEndpoint"),
    ExportKind.GROUP: ("group_export_endpoint", "groupExportEndpoint"),
    ExportKind.SYSTEM: ("system_export_endpoint", "systemExportEndpoint"),
}


class ApiClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    auth_type: AuthType = Field(alias="authType")
    base_url: str = Field(default="", alias="baseURL")
    client_id: str = Field(default="", alias="clientId")
    client_secret: str = Field(default="", alias="clientSecret", repr=False)
    description: str = ""
    fastest_resource: str = Field(default="Patient", alias="fastestResource")
    group_export_endpoint: str = Field(default=DISABLED, alias="groupExportEndpoint")
    jwks: FrozenJson = Field(default_factory=dict, validate_default=True)
    jwks_auth: bool = Field(default=False, alias="jwksAuth")
    jwks_url: str = Field(default="", alias="jwksUrl")
    jwks_url_auth: bool = Field(default=False, alias="jwksUrlAuth")
    name: str
    patient_export_endpoint: str = Field(default=DISABLED, alias="patientExportEndpoint")
    public: bool = False
    requires_auth: bool = Field(default=False, alias="requiresAuth")
    since_param: str = Field(default="_since", alias="sinceParam")
    strict_ssl: bool = Field(default=True, alias="strictSSL")
    system_export_endpoint: str = Field(default=DISABLED, alias="systemExportEndpoint")
    token_endpoint: str = Field(default="", alias="tokenEndpoint")

    def __hash__(self) -> int:
        return hash(json.dumps(self.as_bdt_config(), sort_keys=True))

    @property
    def jwks_mode(self) -> JwksMode:
        if self.jwks_url_auth:
            return JwksMode.URL
        if self.jwks_auth:
            return JwksMode.INLINE
        return JwksMode.NONE

    def export_endpoint(self, kind: ExportKind) -> str:
        attr, _ = _EXPORT_ENDPOINTS[ExportKind(kind)]
        return getattr(self, attr)

    def supports_export(self, kind: ExportKind) -> bool:
        return self.export_endpoint(kind) != DISABLED

    @property
    def enabled_exports(self) -> tuple[ExportKind, ...]:
        return tuple(kind for kind in ExportKind if self.supports_export(kind))

    def export_url(self, kind: ExportKind, since: str | None = None) -> str:
        """Absolute kick-off URL for a bulk export.

        Args:
            kind: Which export level to target.
            since: Optional incremental-sync timestamp, sent under `since_param`.

        Raises:
            ConfigurationError: the export kind is disabled or base_url is unset.
        """
        kind = ExportKind(kind)
        if not self.supports_export(kind):
            _, alias = _EXPORT_ENDPOINTS[kind]
            raise ConfigurationError([ConfigProblem(alias, f"{kind.value} export is disabled")])
        if not self.base_url:
            raise ConfigurationError([ConfigProblem("baseURL", "required to build export URLs")])

        url = f"{self.base_url}{self.export_endpoint(kind)}"
        if since is not None:
            url = f"{url}?{urlencode({self.since_param: since})}"
        return url

    def as_bdt_config(self) -> dict[str, Any]:
        """camelCase, JSON-ready mapping in the Bulk Data Tester config shape."""
        return self.model_dump(by_alias=True, mode="json")

    def redacted(self) -> dict[str, Any]:
        """Same as `as_bdt_config()` with the client secret masked, for logs."""
        data = self.as_bdt_config()
        data["clientSecret"] = "***" if self.client_secret else ""
        return data
