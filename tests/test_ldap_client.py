"""
Tests for the impacket-backed LDAP client helpers.
"""

from unittest.mock import MagicMock, patch

import pytest
from impacket.ldap import ldap as ldap_impacket

from talon.utils.ldap import LDAPConnectionError, base_dn_for, close, dial_tls, simple_bind


class TestBaseDn:
    def test_domain(self):
        assert base_dn_for("corp.local") == "DC=corp,DC=local"

    def test_empty(self):
        assert base_dn_for("") == ""


class TestDialTls:
    @patch("talon.utils.ldap.ldap_impacket.LDAPConnection")
    def test_ldaps_url(self, mock_conn):
        dial_tls("10.0.0.1", "CORP.LOCAL")

        mock_conn.assert_called_once_with("ldaps://10.0.0.1:636", baseDN="DC=CORP,DC=LOCAL", dstIp="10.0.0.1")

    @patch("talon.utils.ldap.ldap_impacket.LDAPConnection")
    def test_socket_error(self, mock_conn):
        mock_conn.side_effect = TimeoutError("timed out")

        with pytest.raises(LDAPConnectionError, match="10.0.0.1:636"):
            dial_tls("10.0.0.1", "CORP.LOCAL")


class TestSimpleBind:
    def test_success(self):
        conn = MagicMock()

        assert simple_bind(conn, "jdoe@CORP.LOCAL", "Winter2024!") is None
        conn.login.assert_called_once_with(
            user="jdoe@CORP.LOCAL", password="Winter2024!", domain="", authenticationChoice="simple"
        )

    def test_bind_error_text(self):
        conn = MagicMock()
        conn.login.side_effect = ldap_impacket.LDAPSessionError(
            errorString="invalidCredentials: AcceptSecurityContext error, data 775, v4563"
        )

        assert "data 775" in simple_bind(conn, "jdoe@CORP.LOCAL", "x")

    def test_dropped_connection(self):
        conn = MagicMock()
        conn.login.side_effect = ConnectionResetError("reset by peer")

        with pytest.raises(LDAPConnectionError):
            simple_bind(conn, "jdoe@CORP.LOCAL", "x")


class TestClose:
    def test_none_is_ignored(self):
        close(None)

    def test_socket_error_is_ignored(self):
        conn = MagicMock()
        conn.close.side_effect = OSError("already closed")

        close(conn)

        conn.close.assert_called_once()
