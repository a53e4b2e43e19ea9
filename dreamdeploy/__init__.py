"""
dreamdeploy - dependency-ordered bring-up of the DREAM components.

Deploys a governance registry, a ledger and a tax pool onto a target
environment, wiring each component's address into the ones that need it.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dreamdeploy")
except PackageNotFoundError:
    # Package not installed, fallback to pyproject.toml
    __version__ = "0.1.0"
