# LDAP client for Talon
#
# Thin wrapper over impacket's LDAPConnection: open an LDAPS channel to a
# domain controller and try one simple bind. Bind failures come back as the
# server's diagnostic text so the classifier can inspect it.

from typing import Optional

from impacket.ldap import ldap as ldap_impacket

from .logging import debug

LDAPS_PORT = 636


def base_dn_for(domain: str) -> str:
    """Build the naming context DN for a domain (corp.local -> DC=corp,DC=local)."""
    return ",".join([f"DC={part}" for part in domain.split(".") if part])


def dial_tls(host: str, domain: str = "") -> ldap_impacket.LDAPConnection:
    """
    Open an LDAPS connection to a domain controller.

    The server certificate is not verified; domain controllers commonly
    present self-signed or internal-CA certificates.

    Args:
        host: DC address
        domain: Domain name, used for the base DN only

    Returns:
        Connected (not yet bound) LDAPConnection

    Raises:
        LDAPConnectionError: If the TCP or TLS handshake fails
    """
    ldap_url = f"ldaps://{host}:{LDAPS_PORT}"
    debug(f"LDAP: Connecting to {ldap_url}")
    try:
        return ldap_impacket.LDAPConnection(ldap_url, baseDN=base_dn_for(domain), dstIp=host)
    except OSError as e:
        raise LDAPConnectionError(f"LDAP connection to {host}:{LDAPS_PORT} failed: {e}") from e
    except ldap_impacket.LDAPSessionError as e:
        raise LDAPConnectionError(f"LDAP connection to {host}:{LDAPS_PORT} failed: {e}") from e


def simple_bind(conn: ldap_impacket.LDAPConnection, bind_dn: str, password: str) -> Optional[str]:
    """
    Perform a simple bind on an open connection.

    Args:
        conn: Connection from dial_tls()
        bind_dn: Bind name, e.g. "jdoe@CORP.LOCAL"
        password: Password to bind with

    Returns:
        None on success, otherwise the bind error text
        (e.g. "invalidCredentials: 80090308: LdapErr: ... data 52e, v4563")

    Raises:
        LDAPConnectionError: If the connection drops during the bind
    """
    try:
        # An empty domain keeps impacket from rewriting the bind name
        conn.login(user=bind_dn, password=password, domain="", authenticationChoice="simple")
    except ldap_impacket.LDAPSessionError as e:
        return str(e)
    except OSError as e:
        raise LDAPConnectionError(f"LDAP connection lost during bind: {e}") from e
    return None


def close(conn: Optional[ldap_impacket.LDAPConnection]) -> None:
    """Close a connection, ignoring errors from an already-dead socket."""
    if conn is None:
        return
    try:
        conn.close()
    except OSError as e:
        debug(f"LDAP: Error while closing connection: {e}")


class LDAPConnectionError(Exception):
    """The directory could not be reached over LDAPS"""

    pass
