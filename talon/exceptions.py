# Exceptions raised across Talon.
#
# Protocol outcomes are never raised; they are recorded as AttemptResults.
# Everything here ends the run.


class TalonError(Exception):
    """Base exception for Talon"""

    pass


class ConfigurationError(TalonError):
    """Invalid or contradictory run configuration"""

    pass


class SourceError(TalonError):
    """A host or username list could not be read"""

    pass


class OutputError(TalonError):
    """The result file could not be written"""

    pass


class ClockSkewError(TalonError):
    """Local clock differs too much from the KDC for any attempt to succeed"""

    def __init__(self, host: str, detail: str = ""):
        self.host = host
        self.detail = detail
        super().__init__(
            f"The difference between the time on the Kerberos server {host} and you is too great to continue"
        )


class RunAborted(TalonError):
    """The operator declined to continue the run"""

    pass
