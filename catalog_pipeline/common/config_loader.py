"""
Configuration Loader

Loads the YAML site configuration: which storefront template to walk,
the markup names each template relies on, and export settings.

Every key is optional; anything missing keeps the default for the known
target site.
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .constants import USER_AGENT

TEMPLATE_MENU = "menu"
TEMPLATE_LISTING = "listing"
SUPPORTED_TEMPLATES = (TEMPLATE_MENU, TEMPLATE_LISTING)

DEFAULT_CONFIG_FILE = "site.yaml"


@dataclass(frozen=True)
class SiteSettings:
    """Site and template constants used by navigators and extractors."""

    site_root: str = "https://www.omfoods.com"
    template: str = TEMPLATE_MENU

    # Menu-driven template (navigation)
    main_nav_class: str = "main-nav-bar"
    category_class: str = "has-children"
    product_title_tag: str = "h5"
    product_title_class: str = "product-item-title"

    # Menu-driven template (product page)
    product_container_attribute: str = "data-product-container"
    product_id_attribute: str = "data-product-id"
    description_class: str = "product-description"
    option_group_attribute: str = "data-product-option-change"
    option_label_class: str = "form-label-text"
    price_class: str = "product-price"
    price_value_class: str = "price-value"
    stock_script_prefix: str = 'var BCData = {"product_attributes":'
    stock_script_variable: str = "var BCData = "
    pricing_endpoint: str = "/remote/v1/product-attributes/{product_id}"

    # Paged listing template
    listing_path: str = "/collections/all"
    product_script_prefix: str = "var productJSON = "

    # Transport
    timeout: float = 30.0
    user_agent: str = USER_AGENT

    def url(self, path: str) -> str:
        """Build an absolute URL on the site from a root-relative path."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.site_root.rstrip('/')}/{path.lstrip('/')}"


@dataclass(frozen=True)
class ExportSettings:
    """Where and how the canonical product list is written."""

    output_dir: str = "output"
    price_list_filename: str = "price_list.csv"
    sql_filename: str = "products.sql"
    sql_proc_name: str = "import_bulk_product"


def _get_config_dir() -> Path:
    """Get the config directory path."""
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


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the config file; defaults to config/site.yaml

    Returns:
        Parsed YAML content as dictionary (empty if the file is empty)

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file does not hold a mapping
    """
    config_path = Path(path) if path else _get_config_dir() / DEFAULT_CONFIG_FILE

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping of sections: {config_path}")

    return config


def _apply_section(defaults, section: Optional[Dict[str, Any]]):
    """Overlay known keys from a YAML section onto a settings dataclass."""
    if not section:
        return defaults
    if not isinstance(section, dict):
        raise ValueError(f"Config section must be a mapping, got {type(section).__name__}")
    known = {f.name for f in fields(defaults)}
    overrides = {key: value for key, value in section.items() if key in known}
    return replace(defaults, **overrides)


def load_site_settings(
    config: Optional[Dict[str, Any]] = None,
    template: Optional[str] = None,
) -> SiteSettings:
    """
    Build SiteSettings from a parsed config dict.

    Reads the ``site`` section; ``CATALOG_SITE_ROOT`` in the environment
    overrides the site root and ``template`` (from the command line)
    overrides the configured template.

    Raises:
        ValueError: If the template name is not supported
    """
    settings = _apply_section(SiteSettings(), (config or {}).get('site'))

    env_root = os.environ.get('CATALOG_SITE_ROOT')
    if env_root:
        settings = replace(settings, site_root=env_root)

    if template:
        settings = replace(settings, template=template)

    if settings.template not in SUPPORTED_TEMPLATES:
        raise ValueError(
            f"Unsupported template: {settings.template}. "
            f"Supported: {', '.join(SUPPORTED_TEMPLATES)}"
        )

    return settings


def load_export_settings(config: Optional[Dict[str, Any]] = None) -> ExportSettings:
    """
    Build ExportSettings from a parsed config dict.

    Reads the ``export`` section; ``CATALOG_SQL_PROC_NAME`` in the
    environment overrides the stored procedure name.
    """
    settings = _apply_section(ExportSettings(), (config or {}).get('export'))

    env_proc = os.environ.get('CATALOG_SQL_PROC_NAME')
    if env_proc:
        settings = replace(settings, sql_proc_name=env_proc)

    return settings
