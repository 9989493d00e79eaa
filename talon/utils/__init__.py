"""Utility modules for Talon.

Modules:
    console: Rich console output, banner, prompts and run summary
    helpers: Host/username list loading
    kerberos: Kerberos AS exchange client (impacket)
    ldap: LDAPS simple bind client (impacket)
    logging: Logging entry points used across the package
"""
