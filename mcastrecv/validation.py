"""
This module defines the JSON schema for validating the merged listener
settings before a Configuration is built from them.
"""

from jsonschema import ValidationError, validate

from .config import IFNAMSIZ, MAX_TIMEOUT, Configuration

listener_settings_schema = {
    "type": "object",
    "properties": {
        "interface": {"type": "string", "maxLength": IFNAMSIZ - 1},
        "quiet": {"type": "boolean"},
        "timeout": {"type": "integer", "minimum": 0, "maximum": MAX_TIMEOUT},
        "group": {"type": "string", "minLength": 1},
        "service": {"type": "string", "minLength": 1},
    },
    "required": ["interface", "quiet", "timeout", "group", "service"],
    "additionalProperties": False,
}


class ConfigValidator:
    """A validator for listener settings."""

    def validate(self, settings):
        """
        Validates settings against the listener schema.

        Args:
            settings (dict): Built-in defaults with the command line laid over them.

        Returns:
            tuple(Configuration|None, str|None): A tuple of
                (configuration, error_message). If validation fails,
                configuration is None.
        """
        error = self._check_limits(settings)
        if error:
            return None, error

        try:
            validate(instance=settings, schema=listener_settings_schema)
        except ValidationError as e:
            return None, f"Invalid settings: {e.message}"

        return Configuration(**settings), None

    def _check_limits(self, settings):
        """Reports the two limits the operator is most likely to hit by name."""
        interface = settings.get("interface")
        if isinstance(interface, str) and len(interface) >= IFNAMSIZ:
            return f"{interface}: interface name too long"

        timeout = settings.get("timeout")
        if isinstance(timeout, int) and timeout > MAX_TIMEOUT:
            return f"{timeout}: invalid timeout (>{MAX_TIMEOUT})"
        if isinstance(timeout, int) and timeout < 0:
            return f"{timeout}: invalid timeout (<0)"

        return None
