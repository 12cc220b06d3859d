"""Error message rendering.

Templates reference rule options with ``{:key}`` placeholders, for example
``"must be between {:min} and {:max} characters"``. The rule options, the
field path and any parameters reported by the handler are available.
"""

import re
from datetime import date, datetime
from typing import Any, Mapping


class MessageInterpolator:
    """Interpolates option values into error message templates.

    Supports:
    - {:key} - The option value, formatted for display
    - Unknown keys are left in place so template mistakes stay visible
    """

    PATTERN = re.compile(r"\{:(?P<key>[\w.-]+)\}")

    def __init__(self, date_format: str = "%Y-%m-%d %H:%M:%S"):
        self.date_format = date_format

    def interpolate(self, template: str, options: Mapping[str, Any]) -> str:
        """Replace placeholders in a message template.

        Args:
            template: Message template with {:key} placeholders
            options: Values available for interpolation

        Returns:
            Message with known placeholders replaced
        """

        def replace(match: re.Match) -> str:
            key = match.group("key")
            if key not in options:
                return match.group(0)
            return self._format_value(options[key])

        return self.PATTERN.sub(replace, template)

    def _format_value(self, value: Any) -> str:
        """Format a value for display."""
        if value is None:
            return ""
        if isinstance(value, datetime):
            return value.strftime(self.date_format)
        if isinstance(value, date):
            return value.strftime("%Y-%m-%d")
        if isinstance(value, (list, tuple)):
            return ", ".join(self._format_value(v) for v in value)
        return str(value)


_interpolator = MessageInterpolator()


def interpolate(template: str, options: Mapping[str, Any]) -> str:
    """Interpolate with the default MessageInterpolator."""
    return _interpolator.interpolate(template, options)
