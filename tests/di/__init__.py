"""Mock providers for testing."""

from .core import SettingsOverrideProvider, make_test_settings
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "SettingsOverrideProvider",
    "build_test_container",
    "make_test_settings",
]
