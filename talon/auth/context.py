# Credential dataclass.
#
# One Credential is built per username. The password is shared across the
# run and the domain is fixed per run, always in upper case (it doubles as
# the Kerberos realm).
#
# Usage:
#     cred = Credential(username="jdoe", password="Winter2024!", domain="corp.local")
#     cred.domain        # "CORP.LOCAL"
#     cred.principal     # "jdoe@CORP.LOCAL"

from dataclasses import dataclass


@dataclass(frozen=True)
class Credential:
    """
    Identity submitted by a single attempt.

    Attributes:
        username: sAMAccountName to authenticate as (no domain prefix)
        password: Shared password for the run (" " in enumeration mode)
        domain: Fully qualified domain, normalized to upper case
    """

    username: str
    password: str
    domain: str

    def __post_init__(self):
        object.__setattr__(self, "domain", self.domain.upper())

    @property
    def principal(self) -> str:
        """User principal name used for the LDAP simple bind."""
        return f"{self.username}@{self.domain}"

    @property
    def down_level(self) -> str:
        """DOMAIN\\user form used in result lines."""
        return f"{self.domain}\\{self.username}"

    def __repr__(self) -> str:
        """Safe repr that doesn't expose the password."""
        return (
            f"Credential(username={self.username!r}, domain={self.domain!r}, "
            f"has_password={bool(self.password.strip())})"
        )
