"""kits-couture-api: per-customer kit catalogs served from Google Sheets."""

__version__ = "1.0.0"
