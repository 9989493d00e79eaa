# LDAP authenticator.
#
# Opens an LDAPS connection to the target and performs a simple bind as
# username@DOMAIN. A connection failure is reported as NETWORK_ERROR; the
# scheduler decides whether the run continues.

from ..classification import classify_ldap
from ..models.attempt import Attempt, AttemptResult
from ..models.outcome import ServiceKind
from ..utils.ldap import LDAPConnectionError, close, dial_tls, simple_bind
from ..utils.logging import debug
from .base import Authenticator


class LDAPAuthenticator(Authenticator):
    service = ServiceKind.LDAP

    def login(self, attempt: Attempt) -> AttemptResult:
        cred = attempt.credential
        debug(f"Logging into LDAP with {cred!r} against {attempt.target}")

        conn = None
        try:
            conn = dial_tls(attempt.target, cred.domain)
            raw_error = simple_bind(conn, cred.principal, cred.password)
        except LDAPConnectionError as e:
            debug(str(e))
            return self._result(attempt, classify_ldap(str(e), connected=False))
        finally:
            close(conn)

        if raw_error is not None:
            debug(raw_error)
        return self._result(attempt, classify_ldap(raw_error))
