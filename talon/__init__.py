"""Talon - Kerberos and LDAP credential validation for Active Directory."""

__version__ = "1.0.0"
