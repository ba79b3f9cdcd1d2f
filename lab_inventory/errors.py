"""Exceptions raised inside the dashboard."""


class LabInventoryError(Exception):
    pass


class ConfigError(LabInventoryError):
    pass


class GatewayError(LabInventoryError):
    """The spreadsheet endpoint could not be reached for a command."""


class ValidationError(LabInventoryError):
    """User input rejected before anything was sent upstream.

    The message is shown to the user as-is.
    """
