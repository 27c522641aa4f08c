"""
rvsim.data is for data manipulation of haplotype, genotype, legend and count
tables. All tables are aligned by row with the legend.
"""

from ._geno import make_geno, calc_allele_freqs, calc_allele_freqs_all
from ._geno import rare_allele_count
from ._flip import ControlConfig, FlipResult, flip_index, flip_file, flip_data
from ._prune import select_var, prune_var
from ._merge import merge_cases, make_long
