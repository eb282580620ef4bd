"""Authorization predicates over :class:`CallerContext`."""

from land_registry.config import AuthorizationConfig
from land_registry.context import CallerContext
from land_registry.models import LandRecord


def is_registrar(caller: CallerContext, config: AuthorizationConfig) -> bool:
    """True when the caller belongs to the registrar org and holds the registrar role."""
    return (
        caller.organization_id == config.registrar_org_id
        and caller.attribute(config.role_attribute) == config.registrar_role
    )


def is_owner(caller: CallerContext, record: LandRecord) -> bool:
    """True when the caller is the record's current owner."""
    return caller.client_id == record.owner
