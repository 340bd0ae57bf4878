from .mock_catalog import MockCatalog
