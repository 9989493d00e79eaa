"""
Test that all modules can be imported without errors.
"""


def test_import_cli():
    from talon import cli

    assert hasattr(cli, "main")


def test_import_engine():
    from talon import engine

    assert hasattr(engine, "AttemptScheduler")
    assert hasattr(engine, "Decision")


def test_import_authenticators():
    from talon.authenticators import kerberos, ldap

    assert hasattr(kerberos, "KerberosAuthenticator")
    assert hasattr(ldap, "LDAPAuthenticator")


def test_import_protocol_clients():
    from talon.utils import kerberos, ldap

    assert hasattr(kerberos, "kerberos_login")
    assert hasattr(ldap, "simple_bind")


def test_version():
    import talon

    assert talon.__version__
