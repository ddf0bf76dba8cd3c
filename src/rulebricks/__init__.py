"""rulebricks: async workspace client and Forge rule builder."""

from importlib.metadata import PackageNotFoundError, version

from rulebricks.client import RulebricksClient
from rulebricks.config import ClientConfig, load_client_config
from rulebricks.forge import DynamicValue, DynamicValues, Rule, RuleTest

try:
    __version__ = version("rulebricks")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "ClientConfig",
    "DynamicValue",
    "DynamicValues",
    "Rule",
    "RuleTest",
    "RulebricksClient",
    "load_client_config",
]
