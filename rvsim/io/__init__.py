from ._read import read_hap, read_legend, read_mac_bins
from ._write import write_hap
