from .alias_table import AliasTable, build_alias_table, sample_alias_table_many
from .numba_alias import sample_alias_table, sample_alias_table_square_histogram
from .reference import build_alias_table_reference
