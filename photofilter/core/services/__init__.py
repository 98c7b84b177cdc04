from .filter_service import FilterService, create_filter_service

__all__ = ['FilterService', 'create_filter_service']
