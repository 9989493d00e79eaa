# Authenticators: one per ServiceKind, behind a common login() contract.

from ..models.outcome import ServiceKind
from .base import Authenticator
from .kerberos import KerberosAuthenticator
from .ldap import LDAPAuthenticator

_AUTHENTICATORS = {
    ServiceKind.KERBEROS: KerberosAuthenticator,
    ServiceKind.LDAP: LDAPAuthenticator,
}


def build_authenticator(service: ServiceKind) -> Authenticator:
    """Return the authenticator for a service."""
    try:
        return _AUTHENTICATORS[ServiceKind(service)]()
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported service: {service!r}") from None


__all__ = ["Authenticator", "KerberosAuthenticator", "LDAPAuthenticator", "build_authenticator"]
