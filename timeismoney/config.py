from dataclasses import dataclass, field
import os
from typing import Any, Dict
from dotenv import load_dotenv

from .extractors.normalize import normalize_amount_string
from .models import Formatters, Frequency, WageConfig

load_dotenv()

# Extension defaults used when the settings store has nothing
DEFAULT_SETTINGS: Dict[str, Any] = {
    "amount": "30",
    "frequency": "hourly",
    "currencySymbol": "$",
    "currencyCode": "USD",
    "thousands": "commas",
    "decimal": "dot",
    "disabled": False,
    "debugMode": False,
}


def _env(name: str, default: Any):
    return field(default_factory=lambda: os.getenv(name, str(default)))


def _env_bool(name: str, default: bool):
    return field(default_factory=lambda: os.getenv(name, str(default)).lower() in ["true", "1", "yes"])


def _env_int(name: str, default: int):
    return field(default_factory=lambda: int(os.getenv(name, str(default))))


def _env_float(name: str, default: float):
    return field(default_factory=lambda: float(os.getenv(name, str(default))))


@dataclass
class Config:
    """Runtime configuration, read from the environment"""
    wage_amount: str = _env("TIM_WAGE_AMOUNT", DEFAULT_SETTINGS["amount"])
    wage_frequency: str = _env("TIM_WAGE_FREQUENCY", DEFAULT_SETTINGS["frequency"])
    currency_code: str = _env("TIM_CURRENCY_CODE", DEFAULT_SETTINGS["currencyCode"])
    currency_symbol: str = _env("TIM_CURRENCY_SYMBOL", DEFAULT_SETTINGS["currencySymbol"])
    thousands: str = _env("TIM_THOUSANDS", DEFAULT_SETTINGS["thousands"])
    decimal: str = _env("TIM_DECIMAL", DEFAULT_SETTINGS["decimal"])

    # Candidate selection
    min_confidence: float = _env_float("TIM_MIN_CONFIDENCE", 0.5)
    max_dom_depth: int = _env_int("TIM_MAX_DOM_DEPTH", 10)
    max_dom_nodes: int = _env_int("TIM_MAX_DOM_NODES", 500)

    # Output
    compact_format: bool = _env_bool("TIM_COMPACT_FORMAT", True)
    enable_debug: bool = _env_bool("TIM_DEBUG", False)

    @classmethod
    def from_env(cls) -> 'Config':
        """Re-read the environment"""
        return cls()

    def wage_config(self) -> WageConfig:
        return WageConfig(
            amount=normalize_amount_string(self.wage_amount, self.thousands, self.decimal),
            frequency=Frequency.parse(self.wage_frequency),
            currency_code=self.currency_code.upper(),
        )

    def formatters(self) -> Formatters:
        return Formatters.from_settings(self.thousands, self.decimal)


config = Config()
