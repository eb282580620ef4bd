"""Configuration management for land-registry."""

from dataclasses import dataclass, field

from land_registry.exceptions import ConfigurationError


@dataclass
class AuthorizationConfig:
    """Who counts as the registrar."""

    registrar_org_id: str = "Org1MSP"
    registrar_role: str = "gov"
    role_attribute: str = "role"

    def __post_init__(self) -> None:
        if not self.registrar_org_id.strip():
            raise ConfigurationError("registrar_org_id must not be blank")
        if not self.registrar_role.strip():
            raise ConfigurationError("registrar_role must not be blank")


@dataclass
class GeneratorConfig:
    """Synthetic parcel generation configuration."""

    seed: int | None = None
    locale: str = "en_IN"
    num_parcels: int = 10

    def __post_init__(self) -> None:
        if self.num_parcels < 0:
            raise ConfigurationError(f"num_parcels must be >= 0, got {self.num_parcels}")


@dataclass
class RegistryConfig:
    """Main configuration for land-registry."""

    authorization: AuthorizationConfig = field(default_factory=AuthorizationConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    log_level: str = "INFO"
    log_format: str = "standard"
    bootstrap_on_start: bool = False

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Create config from environment variables."""
        import os

        authorization = AuthorizationConfig(
            registrar_org_id=os.getenv("REGISTRAR_ORG_ID", "Org1MSP"),
            registrar_role=os.getenv("REGISTRAR_ROLE", "gov"),
            role_attribute=os.getenv("REGISTRAR_ROLE_ATTRIBUTE", "role"),
        )

        generator = GeneratorConfig(
            seed=_int_from_env("SEED"),
            locale=os.getenv("FAKER_LOCALE", "en_IN"),
            num_parcels=_int_from_env("NUM_PARCELS", default=10),
        )

        return cls(
            authorization=authorization,
            generator=generator,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            bootstrap_on_start=os.getenv("BOOTSTRAP_LEDGER", "false").lower() == "true",
        )


def _int_from_env(name: str, default: int | None = None) -> int | None:
    import os

    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
