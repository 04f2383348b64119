from kits_api.api.main import create_app

__all__ = ["create_app"]
