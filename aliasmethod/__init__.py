"""O(1) sampling of discrete distributions with Vose's alias method."""

from .errors import AliasMethodError, AliasTableInvariantError, InvalidDistributionError
from .model.alias_table import AliasTable, build_alias_table, sample_alias_table_many
from .model.numba_alias import sample_alias_table, sample_alias_table_square_histogram
from .model.reference import build_alias_table_reference
from .validation import check_alias_table, implied_pmf, validate_pmf

__all__ = [
    "AliasMethodError",
    "AliasTable",
    "AliasTableInvariantError",
    "InvalidDistributionError",
    "build_alias_table",
    "build_alias_table_reference",
    "check_alias_table",
    "implied_pmf",
    "sample_alias_table",
    "sample_alias_table_many",
    "sample_alias_table_square_histogram",
    "validate_pmf",
]

__version__ = "0.1.0"
