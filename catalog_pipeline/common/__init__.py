# Common utilities
from .config_loader import ExportSettings, SiteSettings, load_config, load_export_settings, load_site_settings
from .constants import DISPLAY_PRICE_QUANTUM, MARKUP_DIVISOR
from .log_config import setup_logging
from .page_fetcher import FetchFailure, PageFetcher
