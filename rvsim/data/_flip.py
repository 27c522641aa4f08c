import numpy as np
import pandas as pd
import rvsim
from enum import Enum
from typing import NamedTuple, Optional, Sequence, Union

Table = Union[pd.DataFrame, np.ndarray]


class ControlConfig(Enum):
    """Which control datasets are carried along with the cases"""

    INT = "int"
    EXT = "ext"
    EXT_ADJ = "ext_adj"
    ALL = "all"
    ALL_ADJ = "all_adj"

    @classmethod
    def parse(cls, cntrl, adj: bool = False) -> "ControlConfig":
        """Build the configuration from `cntrl` ("int", "ext" or "all") and
        whether the common controls are adjusted"""
        if isinstance(cntrl, cls):
            return cntrl
        if cntrl == "int":
            return cls.INT
        elif cntrl in ["ext", "all"]:
            return cls(f"{cntrl}_adj" if adj else cntrl)
        else:
            raise ValueError(
                f"cntrl must be one of 'int', 'ext', 'all' or a ControlConfig, got {cntrl!r}"
            )


class FlipResult(NamedTuple):
    leg: pd.DataFrame
    geno_case: Table
    geno_ic: Optional[Table] = None
    geno_cc: Optional[Table] = None
    count_case: Optional[pd.DataFrame] = None
    count_ic: Optional[pd.DataFrame] = None
    count_cc: Optional[pd.DataFrame] = None
    count_cc_adj: Optional[pd.DataFrame] = None


# control tables flipped for each configuration, in addition to the legend and
# the case tables
_CONTROL_TABLES = {
    ControlConfig.INT: ["geno_ic", "count_ic"],
    ControlConfig.EXT: ["geno_cc", "count_cc"],
    ControlConfig.EXT_ADJ: ["count_cc_adj"],
    ControlConfig.ALL: ["geno_ic", "geno_cc", "count_ic", "count_cc"],
    ControlConfig.ALL_ADJ: ["geno_ic", "count_ic", "count_cc_adj"],
}

# table name -> (file_type, name of the sample size argument)
_TABLE_KIND = {
    "geno_ic": ("geno", None),
    "geno_cc": ("geno", None),
    "count_ic": ("count", "n_ic"),
    "count_cc": ("count", "n_cc"),
    "count_cc_adj": ("count", "n_cc"),
}


def flip_index(counts: pd.DataFrame, maf: float) -> np.ndarray:
    """Positions of the variants whose alternate allele frequency exceeds 1 - maf,
    i.e. where the alternate allele is actually the major allele"""
    return np.flatnonzero(counts["af"].values > 1 - maf)


def flip_file(
    file_to_flip: Table, flip: Sequence[int], file_type: str, n: int = None
) -> Table:
    """Flip reference / alternate coding of a table at the given variants

    Parameters
    ----------
    file_to_flip : pd.DataFrame or np.ndarray
        table to flip, left untouched
    flip : Sequence[int]
        0-based positions of the variants to flip
    file_type : str
        one of

        - "leg": swap the `a0` and `a1` columns of a legend
        - "geno": genotype matrix, v -> 2 - v
        - "hap": haplotype matrix, v -> 1 - v
        - "count": count table, ac -> 2n - ac and af -> 1 - af
    n : int
        number of individuals, only needed for "count"

    Returns
    -------
    a copy of `file_to_flip` with the relevant values flipped
    """
    flip = np.asarray(flip, dtype=int)
    out = file_to_flip.copy()

    if file_type == "leg":
        a0 = file_to_flip.columns.get_loc("a0")
        a1 = file_to_flip.columns.get_loc("a1")
        out.iloc[flip, a0] = file_to_flip.iloc[flip, a1].values
        out.iloc[flip, a1] = file_to_flip.iloc[flip, a0].values
    elif file_type in ["geno", "hap"]:
        ploidy = 2 if file_type == "geno" else 1
        if isinstance(file_to_flip, pd.DataFrame):
            out.iloc[flip, :] = ploidy - file_to_flip.iloc[flip, :].values
        else:
            out[flip] = ploidy - file_to_flip[flip]
    elif file_type == "count":
        if n is None:
            raise ValueError("n must be specified to flip a count table")
        ac = file_to_flip.columns.get_loc("ac")
        af = file_to_flip.columns.get_loc("af")
        out.iloc[flip, ac] = 2 * n - file_to_flip.iloc[flip, ac].values
        out.iloc[flip, af] = 1 - file_to_flip.iloc[flip, af].values
    else:
        raise ValueError(
            f"file_type must be one of 'leg', 'geno', 'hap' or 'count', got {file_type!r}"
        )
    return out


def flip_data(
    leg: pd.DataFrame,
    flip: Sequence[int],
    geno_case: Table,
    count_case: pd.DataFrame,
    n_case: int,
    cntrl: Union[str, ControlConfig],
    geno_ic: Table = None,
    count_ic: pd.DataFrame = None,
    n_ic: int = None,
    geno_cc: Table = None,
    count_cc: pd.DataFrame = None,
    count_cc_adj: pd.DataFrame = None,
    n_cc: int = None,
    adj: bool = False,
) -> FlipResult:
    """Flip all datasets of a simulation replicate at the variants where the
    alternate allele is the major one

    The legend and the case tables are always flipped. Which control tables are
    flipped depends on the control configuration, the other control tables are
    returned as None.

    Parameters
    ----------
    leg : pd.DataFrame
        legend
    flip : Sequence[int]
        0-based legend positions to flip, see `flip_index`
    geno_case, count_case, n_case :
        case genotype matrix, count table and number of individuals
    cntrl : str or ControlConfig
        "int", "ext" or "all" (combined with `adj`), or a ControlConfig
    geno_ic, count_ic, n_ic :
        internal controls
    geno_cc, count_cc, count_cc_adj, n_cc :
        common (external) controls, unadjusted and adjusted
    adj : bool
        whether the adjusted common controls are used, only read when `cntrl`
        is a string

    Returns
    -------
    FlipResult
        if `flip` is empty, all inputs unchanged
    """
    config = ControlConfig.parse(cntrl, adj)
    tables = dict(
        geno_ic=geno_ic,
        geno_cc=geno_cc,
        count_ic=count_ic,
        count_cc=count_cc,
        count_cc_adj=count_cc_adj,
    )

    if len(flip) == 0:
        return FlipResult(leg, geno_case, count_case=count_case, **tables)

    sample_size = dict(n_ic=n_ic, n_cc=n_cc)
    flipped = dict()
    for name in _CONTROL_TABLES[config]:
        if tables[name] is None:
            raise ValueError(f"{name} must be provided when cntrl={config.value}")
        file_type, n_name = _TABLE_KIND[name]
        n = sample_size[n_name] if n_name is not None else None
        flipped[name] = flip_file(tables[name], flip, file_type=file_type, n=n)

    rvsim.logger.info(f"Flipped {len(flip)} variants (cntrl={config.value})")
    return FlipResult(
        leg=flip_file(leg, flip, file_type="leg"),
        geno_case=flip_file(geno_case, flip, file_type="geno"),
        count_case=flip_file(count_case, flip, file_type="count", n=n_case),
        **flipped,
    )
