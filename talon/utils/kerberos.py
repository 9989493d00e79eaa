# Kerberos client for Talon
#
# Performs one AS exchange against a KDC with impacket and returns the raw
# error text (or None on success). Two flavours:
#
# - normal: impacket's getKerberosTGT, which learns the salt from the KDC
#   and proves knowledge of the password with PA-ENC-TIMESTAMP.
# - enumeration: a single AS-REQ whose pre-authentication is encrypted with
#   a constrained etype (DES3 by default). The KDC's reply discloses whether
#   the principal exists and which pre-authentication policy applies.

import datetime
import random
from dataclasses import dataclass, field
from typing import Optional, Tuple

from impacket.krb5 import constants
from impacket.krb5.asn1 import AS_REP, AS_REQ, KRB_ERROR, PA_ENC_TS_ENC, EncryptedData, seq_set, seq_set_iter
from impacket.krb5.crypto import InvalidChecksum, _enctype_table
from impacket.krb5.kerberosv5 import KerberosError, getKerberosTGT, sendReceive
from impacket.krb5.types import KerberosTime, Principal
from pyasn1.codec.der import decoder, encoder
from pyasn1.error import PyAsn1Error
from pyasn1.type.univ import noValue

from .logging import debug

KDC_PORT = 88

ETYPE_DES_CBC_CRC = constants.EncryptionTypes.des_cbc_crc.value
ETYPE_DES_CBC_MD5 = constants.EncryptionTypes.des_cbc_md5.value
ETYPE_DES3 = constants.EncryptionTypes.des3_cbc_sha1_kd.value
ETYPE_AES128 = constants.EncryptionTypes.aes128_cts_hmac_sha1_96.value
ETYPE_AES256 = constants.EncryptionTypes.aes256_cts_hmac_sha1_96.value
ETYPE_RC4 = constants.EncryptionTypes.rc4_hmac.value

# Enc-part etypes that only a DES-restricted account is answered with
DES_FAMILY = frozenset({ETYPE_DES_CBC_CRC, ETYPE_DES_CBC_MD5, ETYPE_DES3})

DEFAULT_TICKET_ETYPES = (ETYPE_AES256, ETYPE_AES128, ETYPE_RC4, ETYPE_DES3, ETYPE_DES_CBC_MD5)

# Error text fragments produced by this module; the classifier matches on them
NETWORK_ERROR_TEXT = "failed to communicate with KDC"
ASREP_DECRYPT_TEXT = "AS_REP is not valid or client password/keytab incorrect < error decrypting AS_REP encrypted part"
INTEGRITY_VERIFICATION_FAILED = "integrity verification failed"
INTEGRITY_CHECKSUM_INCORRECT = "integrity checksum incorrect"


@dataclass(frozen=True)
class RealmConfig:
    """
    Minimal realm configuration for one attempt: the credential's domain
    mapped to the target host as its only KDC.

    Attributes:
        realm: Kerberos realm (upper-case domain)
        kdc: KDC address
        kdc_port: KDC port
        preauth_etypes: Etypes offered for PA-ENC-TIMESTAMP (empty = library default)
        ticket_etypes: Etypes listed in the AS-REQ body
        disable_fast: FAST armoring is not negotiated
        assume_preauth: Pre-authentication is sent without waiting for PREAUTH_REQUIRED
    """

    realm: str
    kdc: str
    kdc_port: int = KDC_PORT
    preauth_etypes: Tuple[int, ...] = ()
    ticket_etypes: Tuple[int, ...] = field(default=DEFAULT_TICKET_ETYPES)
    disable_fast: bool = True
    assume_preauth: bool = True

    @classmethod
    def for_target(cls, realm: str, kdc: str, enumerate: bool = False) -> "RealmConfig":
        """Build the configuration for one attempt; enumeration forces a DES3 pre-auth offer."""
        if enumerate:
            return cls(realm=realm.upper(), kdc=kdc, preauth_etypes=(ETYPE_DES3,))
        return cls(realm=realm.upper(), kdc=kdc)

    @property
    def enumeration(self) -> bool:
        return bool(self.preauth_etypes)

    def to_krb5_conf(self) -> str:
        """Render as krb5.conf text (debug output only)."""
        lines = [
            "[libdefaults]",
            f"  default_realm = {self.realm}",
            "  dns_lookup_realm = false",
            "  dns_lookup_kdc = false",
            f"  disable_fast = {str(self.disable_fast).lower()}",
            f"  assume_preauth = {str(self.assume_preauth).lower()}",
        ]
        if self.preauth_etypes:
            lines.append(f"  preferred_preauth_types = {' '.join(str(e) for e in self.preauth_etypes)}")
        lines += [
            "[realms]",
            f"  {self.realm} = {{",
            f"    kdc = {self.kdc}:{self.kdc_port}",
            "  }",
        ]
        return "\n".join(lines)


def kerberos_login(username: str, domain: str, password: str, realm_config: RealmConfig) -> Optional[str]:
    """
    Run one AS exchange for username@domain against the configured KDC.

    Args:
        username: Client principal name (no realm)
        domain: Realm of the principal
        password: Password to prove (or the enumeration placeholder)
        realm_config: KDC mapping and etype constraints

    Returns:
        None if a TGT was obtained, otherwise the error text
    """
    debug(f"Kerberos: realm configuration\n{realm_config.to_krb5_conf()}")
    try:
        if realm_config.enumeration:
            _enumeration_exchange(username, domain.upper(), password, realm_config)
        else:
            principal = Principal(username, type=constants.PrincipalNameType.NT_PRINCIPAL.value)
            getKerberosTGT(principal, password, domain.upper(), b"", b"", "", kdcHost=realm_config.kdc)
    except KerberosError as e:
        return str(e)
    except OSError as e:
        return f"AS Exchange Error: {NETWORK_ERROR_TEXT} {realm_config.kdc}: {e}"
    except AsRepDecryptError as e:
        return str(e)
    except Exception as e:
        # getKerberosTGT raises version-dependent error types when a
        # no-preauth AS-REP does not decrypt with the supplied password
        debug(f"Kerberos: unexpected {type(e).__name__} from AS exchange", exc_info=True)
        return f"{type(e).__name__}: {e}"
    return None


def _string_to_key(etype: int, password: str, salt: str):
    cipher = _enctype_table[etype]
    if etype == ETYPE_RC4:
        return cipher, cipher.string_to_key(password, salt, None)
    return cipher, cipher.string_to_key(password.encode("utf-8"), salt.encode("utf-8"), None)


def _build_as_req(username: str, realm: str, password: str, realm_config: RealmConfig) -> bytes:
    as_req = AS_REQ()
    as_req["pvno"] = 5
    as_req["msg-type"] = int(constants.ApplicationTagNumbers.AS_REQ.value)

    # PA-ENC-TIMESTAMP under the constrained etype, keyed with the default salt
    cipher, key = _string_to_key(realm_config.preauth_etypes[0], password, f"{realm}{username}")
    now = datetime.datetime.now(datetime.timezone.utc)
    timestamp = PA_ENC_TS_ENC()
    timestamp["patimestamp"] = KerberosTime.to_asn1(now)
    timestamp["pausec"] = now.microsecond

    encrypted = EncryptedData()
    encrypted["etype"] = cipher.enctype
    # Key usage 1: AS-REQ PA-ENC-TIMESTAMP
    encrypted["cipher"] = cipher.encrypt(key, 1, encoder.encode(timestamp), None)

    as_req["padata"] = noValue
    as_req["padata"][0] = noValue
    as_req["padata"][0]["padata-type"] = int(constants.PreAuthenticationDataTypes.PA_ENC_TIMESTAMP.value)
    as_req["padata"][0]["padata-value"] = encoder.encode(encrypted)

    req_body = seq_set(as_req, "req-body")
    opts = [
        constants.KDCOptions.forwardable.value,
        constants.KDCOptions.renewable.value,
        constants.KDCOptions.proxiable.value,
    ]
    req_body["kdc-options"] = constants.encodeFlags(opts)

    client = Principal(username, type=constants.PrincipalNameType.NT_PRINCIPAL.value)
    server = Principal(f"krbtgt/{realm}", type=constants.PrincipalNameType.NT_PRINCIPAL.value)
    seq_set(req_body, "cname", client.components_to_asn1)
    seq_set(req_body, "sname", server.components_to_asn1)
    req_body["realm"] = realm

    till = now + datetime.timedelta(days=1)
    req_body["till"] = KerberosTime.to_asn1(till)
    req_body["rtime"] = KerberosTime.to_asn1(till)
    req_body["nonce"] = random.getrandbits(31)
    seq_set_iter(req_body, "etype", tuple(int(e) for e in realm_config.ticket_etypes))

    return encoder.encode(as_req)


def _enumeration_exchange(username: str, realm: str, password: str, realm_config: RealmConfig) -> None:
    message = _build_as_req(username, realm, password, realm_config)
    response = sendReceive(message, realm, realm_config.kdc)

    try:
        as_rep = decoder.decode(response, asn1Spec=AS_REP())[0]
    except PyAsn1Error:
        # sendReceive hands back KDC_ERR_PREAUTH_REQUIRED instead of raising it
        krb_error = decoder.decode(response, asn1Spec=KRB_ERROR())[0]
        raise KerberosError(error=int(krb_error["error-code"]), packet=krb_error)

    # An AS-REP means the KDC skipped pre-authentication for this principal
    rep_etype = int(as_rep["enc-part"]["etype"])
    if rep_etype not in _enctype_table:
        raise AsRepDecryptError(rep_etype, f"unsupported enc-part etype {rep_etype}")
    cipher, key = _string_to_key(rep_etype, password, f"{realm}{username}")
    try:
        # Key usage 3: AS-REP encrypted part
        cipher.decrypt(key, 3, as_rep["enc-part"]["cipher"].asOctets())
    except InvalidChecksum:
        reason = INTEGRITY_CHECKSUM_INCORRECT if rep_etype in DES_FAMILY else INTEGRITY_VERIFICATION_FAILED
        raise AsRepDecryptError(rep_etype, reason)


class AsRepDecryptError(Exception):
    """An AS-REP was returned but its encrypted part did not decrypt"""

    def __init__(self, etype: int, reason: str):
        self.etype = etype
        self.reason = reason
        super().__init__(f"AS Exchange Error: {ASREP_DECRYPT_TEXT} (etype {etype}): error decrypting: {reason}")
