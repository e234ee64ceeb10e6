# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Error taxonomy shared by the calculation engines and the HTTP layer."""


class WealthModelError(Exception):
    """Base class for all engine errors."""


class InvalidInput(WealthModelError, ValueError):
    """Request data is missing, malformed or outside the allowed range.

    Raised before any computation starts; callers get no partial result.
    """


class UpstreamUnavailable(WealthModelError, RuntimeError):
    """An optional collaborator (narrative model, price feed) failed.

    Always recovered locally by substituting a placeholder value.
    """


class InternalError(WealthModelError, ArithmeticError):
    """A computed metric is not finite."""
