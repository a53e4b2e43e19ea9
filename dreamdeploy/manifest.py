"""
The DREAM component manifest.

Three components, deployed in this order:

    Government   DreamGovernment()
    Token        DreamToken(initial_supply, Government)
    TaxPool      TaxPool(Government, Token)
"""
from dreamdeploy.config.constants import (
    DEFAULT_INITIAL_LEDGER_SUPPLY,
    GOVERNMENT_KIND,
    TAX_POOL_KIND,
    TOKEN_KIND,
)
from dreamdeploy.core.types import ComponentSpec, Literal, Ref

GOVERNMENT = "Government"
TOKEN = "Token"
TAX_POOL = "TaxPool"


def build_manifest(initial_ledger_supply: int = DEFAULT_INITIAL_LEDGER_SUPPLY) -> list[ComponentSpec]:
    """Return the component specs in deployment order."""
    return [
        ComponentSpec(GOVERNMENT, kind=GOVERNMENT_KIND),
        ComponentSpec(
            TOKEN,
            (Literal(initial_ledger_supply), Ref(GOVERNMENT)),
            kind=TOKEN_KIND,
        ),
        ComponentSpec(
            TAX_POOL,
            (Ref(GOVERNMENT), Ref(TOKEN)),
            kind=TAX_POOL_KIND,
        ),
    ]
