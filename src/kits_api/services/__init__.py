from kits_api.services.catalog import KitCatalogService, clean_email, resolve_tenant_key

__all__ = ["KitCatalogService", "clean_email", "resolve_tenant_key"]
