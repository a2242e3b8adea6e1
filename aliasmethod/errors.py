"""Exception types raised by aliasmethod."""


class AliasMethodError(Exception):
    """Base class for all aliasmethod errors."""


class InvalidDistributionError(AliasMethodError, ValueError):
    """The input cannot be turned into an alias table.

    Raised for malformed input arrays and, when validation is enabled, for
    probability mass functions that are negative, non-finite or do not sum
    to 1. Inputs are never renormalized to make them valid.
    """


class AliasTableInvariantError(AliasMethodError, AssertionError):
    """A built alias table breaks its construction invariants.

    This signals a bug in table construction, not a usage error, and is not
    meant to be recovered from.
    """
