# Kerberos authenticator.
#
# Maps the credential's realm to the target as its only KDC and runs one
# AS exchange. In enumeration mode the pre-authentication etype offer is
# constrained so the KDC discloses account existence and policy.

from ..classification import classify_kerberos
from ..models.attempt import Attempt, AttemptResult
from ..models.outcome import ServiceKind
from ..utils.kerberos import RealmConfig, kerberos_login
from ..utils.logging import debug
from .base import Authenticator


class KerberosAuthenticator(Authenticator):
    service = ServiceKind.KERBEROS

    def login(self, attempt: Attempt) -> AttemptResult:
        """
        Request a TGT for the attempt's credential from the target KDC.

        Raises:
            ClockSkewError: The KDC reports clock skew; no attempt can succeed
        """
        cred = attempt.credential
        debug(f"Logging into Kerberos with {cred!r} against {attempt.target}")
        realm_config = RealmConfig.for_target(cred.domain, attempt.target, enumerate=attempt.enumerate)

        raw_error = kerberos_login(cred.username, cred.domain, cred.password, realm_config)
        if raw_error is not None:
            debug(raw_error)

        classification = classify_kerberos(raw_error, enumerate=attempt.enumerate, host=attempt.target)
        return self._result(attempt, classification)
