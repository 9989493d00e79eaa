# Protocol response classification.
#
# Kerberos and LDAP client libraries only expose human-readable error text,
# so classification is a first-match walk over ordered (fragment, Outcome)
# tables using exact substring containment. More specific fragments must be
# listed before generic ones; the enumeration table is consulted strictly
# before the normal Kerberos table.

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .exceptions import ClockSkewError
from .models.outcome import Outcome
from .utils.kerberos import (
    INTEGRITY_CHECKSUM_INCORRECT,
    INTEGRITY_VERIFICATION_FAILED,
    NETWORK_ERROR_TEXT,
)

FragmentTable = Sequence[Tuple[str, Outcome]]

# Recognised ahead of every table, in all Kerberos modes
KERBEROS_NETWORK_FRAGMENT = NETWORK_ERROR_TEXT
KERBEROS_CLOCK_SKEW_FRAGMENT = "KRB_AP_ERR_SKEW"

KERBEROS_ENUMERATION_TABLE: FragmentTable = (
    ("KDC_ERR_CLIENT_REVOKED", Outcome.ACCOUNT_LOCKED),
    ("KDC_ERR_C_PRINCIPAL_UNKNOWN", Outcome.USER_NOT_EXIST),
    ("KDC_ERR_PREAUTH_FAILED", Outcome.USER_EXISTS),
    # Only returned for an existing principal whose keys lack the offered etype
    ("KDC_ERR_PREAUTH_REQUIRED", Outcome.USER_EXISTS),
    (INTEGRITY_VERIFICATION_FAILED, Outcome.USER_EXISTS_NO_PREAUTH),
    ("KDC_ERR_POLICY", Outcome.USER_EXISTS_SMARTCARD_REQUIRED),
    ("KDC_ERR_ETYPE_NOSUPP", Outcome.USER_EXISTS),
    (INTEGRITY_CHECKSUM_INCORRECT, Outcome.USER_EXISTS_DES_ONLY_NO_PREAUTH),
)

KERBEROS_TABLE: FragmentTable = (
    ("KDC_ERR_CLIENT_REVOKED", Outcome.ACCOUNT_LOCKED),
)

# 775 = ERROR_ACCOUNT_LOCKED_OUT in the AD bind diagnostic
LDAP_TABLE: FragmentTable = (
    ("AcceptSecurityContext error, data 775", Outcome.ACCOUNT_LOCKED),
)


@dataclass(frozen=True)
class ClassificationResult:
    """Result of classifying one protocol response."""

    outcome: Outcome
    fragment: Optional[str] = None  # Table fragment that matched, if any
    raw_error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        """True when an error was present but no table fragment matched it."""
        return self.raw_error is not None and self.fragment is None


def match_fragment(raw_error: str, table: FragmentTable) -> Optional[Tuple[str, Outcome]]:
    """
    Return the first (fragment, outcome) row whose fragment occurs in raw_error.

    Args:
        raw_error: Error text from a protocol client
        table: Ordered fragment table

    Returns:
        The matching row, or None
    """
    for fragment, outcome in table:
        if fragment in raw_error:
            return fragment, outcome
    return None


def classify_kerberos(raw_error: Optional[str], enumerate: bool = False, host: str = "") -> ClassificationResult:
    """
    Classify the result of a Kerberos AS exchange.

    Args:
        raw_error: Error text from the Kerberos client, None on success
        enumerate: Consult the enumeration table before the normal one
        host: KDC address (for the clock skew error)

    Returns:
        ClassificationResult. Unmatched errors are FAILED in normal mode and
        UNCLASSIFIED in enumeration mode.

    Raises:
        ClockSkewError: The KDC rejected the request for clock skew (always fatal)
    """
    if raw_error is None:
        return ClassificationResult(Outcome.SUCCESS)

    if KERBEROS_NETWORK_FRAGMENT in raw_error:
        return ClassificationResult(Outcome.NETWORK_ERROR, KERBEROS_NETWORK_FRAGMENT, raw_error)

    if KERBEROS_CLOCK_SKEW_FRAGMENT in raw_error:
        raise ClockSkewError(host, raw_error)

    if enumerate:
        match = match_fragment(raw_error, KERBEROS_ENUMERATION_TABLE)
        if match:
            return ClassificationResult(match[1], match[0], raw_error)

    match = match_fragment(raw_error, KERBEROS_TABLE)
    if match:
        return ClassificationResult(match[1], match[0], raw_error)

    return ClassificationResult(Outcome.UNCLASSIFIED if enumerate else Outcome.FAILED, None, raw_error)


def classify_ldap(raw_error: Optional[str], connected: bool = True) -> ClassificationResult:
    """
    Classify the result of an LDAP simple bind.

    Args:
        raw_error: Bind error text (or connection error text), None on success
        connected: False when the LDAPS connection itself could not be opened

    Returns:
        ClassificationResult; any unrecognised bind error is FAILED
    """
    if not connected:
        return ClassificationResult(Outcome.NETWORK_ERROR, None, raw_error or "")

    if raw_error is None:
        return ClassificationResult(Outcome.SUCCESS)

    match = match_fragment(raw_error, LDAP_TABLE)
    if match:
        return ClassificationResult(match[1], match[0], raw_error)

    return ClassificationResult(Outcome.FAILED, None, raw_error)
