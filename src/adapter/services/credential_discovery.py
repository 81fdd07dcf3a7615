"""
Credential Discovery

Resolves service credentials from the Cloud Foundry runtime payload
(VCAP_SERVICES / VCAP_APPLICATION), falling back to ApplicationConfig when the
app runs outside Cloud Foundry.

The payload is validated once, on first use, into typed models. A missing or
malformed section is treated as absent.
"""

import logging
import os
from functools import cached_property
from typing import List, Mapping, Optional, Union
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.app.services.credential_provider import ICredentialProvider, SsoCredentials

logger = logging.getLogger(__name__)


class PostgresCredentials(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hostname: str
    port: Union[str, int]
    dbname: str
    username: str
    password: str


class PostgresBinding(BaseModel):
    model_config = ConfigDict(extra="ignore")

    credentials: PostgresCredentials


class XsuaaBinding(BaseModel):
    model_config = ConfigDict(extra="ignore")

    credentials: SsoCredentials


class VcapServices(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    postgresql_db: List[PostgresBinding] = Field(default_factory=list, alias="postgresql-db")
    xsuaa: List[XsuaaBinding] = Field(default_factory=list)


class VcapApplication(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uris: List[str] = Field(default_factory=list)
    application_name: Optional[str] = None


class RuntimeEnvironment(BaseModel):
    """Validated view of the Cloud Foundry environment; absent sections are None"""

    services: Optional[VcapServices] = None
    application: Optional[VcapApplication] = None


class CredentialDiscovery(ICredentialProvider):
    """
    Credential lookups backed by the runtime environment.

    One instance per process; everything is computed on first access and
    never changes afterwards.
    """

    def __init__(self, config, environ: Optional[Mapping[str, str]] = None):
        self.config = config
        self.environ = os.environ if environ is None else environ

    @cached_property
    def runtime(self) -> RuntimeEnvironment:
        return RuntimeEnvironment(
            services=self._parse("VCAP_SERVICES", VcapServices),
            application=self._parse("VCAP_APPLICATION", VcapApplication),
        )

    def _parse(self, key: str, model):
        raw = self.environ.get(key)
        if not raw:
            return None
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(f"Ignoring malformed {key}: {exc.error_count()} error(s)")
            return None

    def get_database_url(self) -> str:
        services = self.runtime.services
        if services and services.postgresql_db:
            creds = services.postgresql_db[0].credentials
            return (
                f"postgresql+asyncpg://{quote_plus(creds.username)}:{quote_plus(creds.password)}"
                f"@{creds.hostname}:{creds.port}/{creds.dbname}?ssl=require"
            )
        return self.config.DB_URI

    def get_sso_credentials(self) -> Optional[SsoCredentials]:
        return self._sso_credentials

    @cached_property
    def _sso_credentials(self) -> Optional[SsoCredentials]:
        services = self.runtime.services
        if services and services.xsuaa:
            return services.xsuaa[0].credentials

        fallback = getattr(self.config, "XSUAA_CREDENTIALS", None)
        if not fallback:
            return None
        try:
            return SsoCredentials.model_validate(fallback)
        except ValidationError as exc:
            logger.warning(f"Ignoring malformed XSUAA_CREDENTIALS: {exc.error_count()} error(s)")
            return None

    def get_app_url(self) -> str:
        application = self.runtime.application
        if application and application.uris:
            return f"https://{application.uris[0]}"
        return self.config.APP_URL.rstrip("/")

    def is_sso_enabled(self) -> bool:
        return bool(self.config.XSUAA_ENABLED) and self.get_sso_credentials() is not None
