# Outcome and service enums.
#
# Outcome is the closed set of semantic results a single attempt can have.
# Each member carries the label written to the console and the result file.

from enum import Enum


class ServiceKind(str, Enum):
    """Authentication service an attempt is submitted to."""

    KERBEROS = "KERB"
    LDAP = "LDAP"


class Outcome(str, Enum):
    """Semantic result of one authentication attempt."""

    SUCCESS = "success"
    FAILED = "failed"
    ACCOUNT_LOCKED = "account_locked"
    USER_EXISTS = "user_exists"
    USER_NOT_EXIST = "user_not_exist"
    USER_EXISTS_NO_PREAUTH = "user_exists_no_preauth"
    USER_EXISTS_SMARTCARD_REQUIRED = "user_exists_smartcard_required"
    USER_EXISTS_DES_ONLY_NO_PREAUTH = "user_exists_des_only_no_preauth"
    NETWORK_ERROR = "network_error"
    UNCLASSIFIED = "unclassified"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def positive(self) -> bool:
        """True for outcomes rendered with the [+] marker."""
        return self in _POSITIVE

    @property
    def user_exists(self) -> bool:
        return self in _EXISTS


_LABELS = {
    Outcome.SUCCESS: "Success",
    Outcome.FAILED: "Failed",
    Outcome.ACCOUNT_LOCKED: "User's Account Locked",
    Outcome.USER_EXISTS: "User Exist",
    Outcome.USER_NOT_EXIST: "User Does Not Exist",
    Outcome.USER_EXISTS_NO_PREAUTH: "User Exist - But Does Not Require Preauth",
    Outcome.USER_EXISTS_SMARTCARD_REQUIRED: "User Exist - But Smartcard is Required",
    Outcome.USER_EXISTS_DES_ONLY_NO_PREAUTH: (
        "User Exist - But Only Allows Kerberos DES Encryption and Does Not Require Preauth"
    ),
    Outcome.NETWORK_ERROR: "Network Error",
    # Unrecognised responses keep the generic label; the console warns separately
    Outcome.UNCLASSIFIED: "Failed",
}

_EXISTS = frozenset(
    {
        Outcome.USER_EXISTS,
        Outcome.USER_EXISTS_NO_PREAUTH,
        Outcome.USER_EXISTS_SMARTCARD_REQUIRED,
        Outcome.USER_EXISTS_DES_ONLY_NO_PREAUTH,
    }
)

_POSITIVE = _EXISTS | {Outcome.SUCCESS}
