"""
Configuration Loader

Loads YAML configuration files for pricing defaults (markup fallback,
currency) and cart purchase rules.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import DEFAULT_CURRENCY, DEFAULT_MARKUP_PERCENT

CONFIG_DIR_ENV = "PRICING_CONFIG_DIR"


@dataclass(frozen=True)
class PricingSettings:
    """
    Pricing policy knobs.

    The defaults are the engine's built-in policy, so engine functions can
    run without touching the filesystem.
    """
    default_markup_percent: float = DEFAULT_MARKUP_PERCENT
    default_currency: str = DEFAULT_CURRENCY
    require_variants_for_cart: bool = True


def _get_config_dir() -> Path:
    """Get the config directory path."""
    env_dir = os.environ.get(CONFIG_DIR_ENV)
    if env_dir:
        env_path = Path(env_dir)
        if env_path.exists():
            return env_path
        raise FileNotFoundError(f"{CONFIG_DIR_ENV} points to a missing directory: {env_path}")

    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'pricing.yaml')

    Returns:
        Parsed YAML content as dictionary (empty file gives {})

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file does not hold a mapping
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return data


def build_pricing_settings(config: Dict[str, Any]) -> PricingSettings:
    """
    Build PricingSettings from a parsed config mapping.

    Missing keys keep the built-in defaults.

    Example:
        {
            'pricing': {'default_markup_percent': 10, 'default_currency': 'USD'},
            'cart': {'require_variants_for_cart': True},
        }
    """
    pricing = config.get('pricing') or {}
    cart = config.get('cart') or {}

    markup = pricing.get('default_markup_percent', DEFAULT_MARKUP_PERCENT)
    if isinstance(markup, bool) or not isinstance(markup, (int, float)) or markup < 0:
        raise ValueError(f"default_markup_percent must be a non-negative number (got {markup!r})")

    currency = str(pricing.get('default_currency', DEFAULT_CURRENCY) or "").strip().upper()
    if not currency:
        raise ValueError("default_currency must not be empty")

    require_variants = cart.get('require_variants_for_cart', True)
    if not isinstance(require_variants, bool):
        raise ValueError(
            f"require_variants_for_cart must be true or false (got {require_variants!r})"
        )

    return PricingSettings(
        default_markup_percent=float(markup),
        default_currency=currency,
        require_variants_for_cart=require_variants,
    )


def load_pricing_settings(config: Optional[Dict[str, Any]] = None) -> PricingSettings:
    """
    Load pricing settings.

    Args:
        config: Parsed config dict (if None, loads config/pricing.yaml)

    Returns:
        PricingSettings
    """
    if config is None:
        config = load_config('pricing.yaml')
    return build_pricing_settings(config)
