# Common utilities
from .config_loader import PricingSettings, build_pricing_settings, load_config, load_pricing_settings
from .constants import DEFAULT_CURRENCY, DEFAULT_MARKUP_PERCENT
from .log_config import setup_logging
