import logging
import math
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

from .errors import ConfigurationError

CONTRAST_RANGE = (0.0, 2.0)
THRESHOLD_RANGE = (0, 255)
DIFFUSION_RANGE = (0.0, 1.0)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(field: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(field, raw, "a boolean (true/false)")


def _coerce(field: str, target: type, raw: Any) -> Any:
    if target is bool:
        return parse_bool(field, raw)
    try:
        return target(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(field, raw, f"a {target.__name__}") from None


@dataclass(frozen=True)
class ConversionSettings:
    contrast: float = 1.3
    gamma: float = 2.2
    threshold: int = 128
    diffusion: float = 0.8
    dither: bool = True

    @classmethod
    def from_env(cls) -> "ConversionSettings":
        return cls.from_mapping(
            {
                "contrast": os.getenv("CONTRAST", "1.3"),
                "gamma": os.getenv("GAMMA", "2.2"),
                "threshold": os.getenv("THRESHOLD", "128"),
                "diffusion": os.getenv("DIFFUSION", "0.8"),
                "dither": os.getenv("DITHER", "true"),
            }
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ConversionSettings":
        return cls().with_overrides(values)

    def with_overrides(self, values: Mapping[str, Any]) -> "ConversionSettings":
        """Return a copy with the recognised keys of ``values`` coerced and applied.

        Unknown keys are ignored so request query strings can carry unrelated
        parameters. The result is validated before it is returned.
        """

        applied = {}
        for field in fields(self):
            if field.name not in values or values[field.name] is None:
                continue
            applied[field.name] = _coerce(field.name, field.type, values[field.name])
        updated = replace(self, **applied)
        updated.validate()
        return updated

    def validate(self) -> None:
        """Reject out-of-range values; nothing is clamped."""

        _check_range("contrast", self.contrast, CONTRAST_RANGE)
        _check_range("diffusion", self.diffusion, DIFFUSION_RANGE)
        if isinstance(self.gamma, bool) or not isinstance(self.gamma, (int, float)):
            raise ConfigurationError("gamma", self.gamma, "a positive number")
        if not math.isfinite(self.gamma) or self.gamma <= 0:
            raise ConfigurationError("gamma", self.gamma, "a positive number")
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, int):
            raise ConfigurationError("threshold", self.threshold, "an integer in 0-255")
        low, high = THRESHOLD_RANGE
        if not low <= self.threshold <= high:
            raise ConfigurationError("threshold", self.threshold, "an integer in 0-255")


def _check_range(field: str, value: Any, bounds: tuple) -> None:
    low, high = bounds
    expected = f"a number in {low}-{high}"
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(field, value, expected)
    if not math.isfinite(value) or not low <= value <= high:
        raise ConfigurationError(field, value, expected)


@dataclass(frozen=True)
class ServiceSettings:
    port: int
    timeout: float
    retries: int
    cache_ttl: float
    cache_size: int
    max_upload_mb: float
    log_level: str

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        return cls(
            port=int(os.getenv("PORT", "5500")),
            timeout=float(os.getenv("SOURCE_TIMEOUT", "10.0")),
            retries=int(os.getenv("SOURCE_RETRIES", "2")),
            cache_ttl=float(os.getenv("CACHE_TTL", "5")),
            cache_size=int(os.getenv("CACHE_SIZE", "16")),
            max_upload_mb=float(os.getenv("MAX_UPLOAD_MB", "20")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


SETTINGS = ServiceSettings.from_env()


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    name = (level or SETTINGS.log_level).upper()
    if name not in LOG_LEVELS:
        raise ConfigurationError("log level", level, "one of " + ", ".join(LOG_LEVELS))
    logging.basicConfig(
        level=name,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return logging.getLogger("eink-image")
