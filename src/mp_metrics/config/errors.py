"""Config – settings errors."""
from __future__ import annotations

from mp_metrics.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Metrics settings could not be assembled."""

    default_code = "metrics_config_error"


class InvalidSettingValueError(ConfigError):
    """A setting is present but the pipeline cannot use its value.

    *source* names where the value came from: an environment variable, a
    ``.env`` key, or ``None`` for values passed in code.
    """

    default_code = "invalid_metrics_setting"

    def __init__(self, setting_name: str, value: object, reason: str, *, source: str | None = None) -> None:
        origin = f" (from {source})" if source else ""
        super().__init__(
            f"Setting '{setting_name}'{origin} has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "reason": reason, "source": source},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason
        self.source = source


__all__ = ["ConfigError", "InvalidSettingValueError"]
