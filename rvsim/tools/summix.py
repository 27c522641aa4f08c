"""
Interface to the Summix R package (https://github.com/hendriau/Summix), used to
estimate ancestry proportions from allele frequencies and to adjust allele
frequencies to a target ancestry composition.

The R package must be installed, e.g. `BiocManager::install("Summix")`.
"""

import subprocess
import tempfile
from typing import List, Sequence, Tuple
import pandas as pd
import rvsim
from ._utils import get_dependency
from ..utils import cd


def _r_vec(values: Sequence) -> str:
    """Format a python sequence as an R vector"""
    items = []
    for v in values:
        if isinstance(v, str):
            items.append(f'"{v}"')
        else:
            items.append(repr(float(v)))
    return "c(" + ", ".join(items) + ")"


def _r_bool(value: bool) -> str:
    return "TRUE" if value else "FALSE"


def run(script: str):
    """Run an R script with Rscript in the current directory

    Parameters
    ----------
    script : str
        content of the R script
    """
    bin_path = get_dependency("Rscript")
    with open("script.R", "w") as f:
        f.write(script)
    subprocess.check_call(f"{bin_path} script.R", shell=True)


def summix(
    data: pd.DataFrame,
    reference: List[str],
    observed: str,
    goodness_of_fit: bool = True,
    override_remove_small_ref: bool = False,
) -> pd.DataFrame:
    """Estimate ancestry proportions with `Summix::summix`

    Parameters
    ----------
    data : pd.DataFrame
        table with the observed and reference allele frequencies
    reference : List[str]
        columns of the reference allele frequencies
    observed : str
        column of the observed allele frequencies
    goodness_of_fit : bool
        whether to report the goodness of fit
    override_remove_small_ref : bool
        keep the estimates of ancestries with a proportion < 1%

    Returns
    -------
    pd.DataFrame
        one row with one column per reference, named as in `reference`, and the
        fit diagnostics (goodness.of.fit, iterations, time, filtered)
    """
    script = f"""
suppressPackageStartupMessages(library(Summix))
data <- read.delim("data.tsv", check.names = FALSE)
res <- summix(
    data = data,
    reference = {_r_vec(reference)},
    observed = "{observed}",
    goodness.of.fit = {_r_bool(goodness_of_fit)},
    override_removeSmallRef = {_r_bool(override_remove_small_ref)}
)
saveRDS(as.data.frame(res), "out.rds")
"""
    import pyreadr

    with tempfile.TemporaryDirectory() as tmp_dir:
        with cd(tmp_dir):
            data.to_csv("data.tsv", sep="\t", index=False)
            run(script)
            res = pyreadr.read_r("out.rds")[None]
    return res


def adj_af(
    data: pd.DataFrame,
    reference: List[str],
    observed: str,
    pi_target: Sequence[float],
    pi_observed: Sequence[float],
    adj_method: str,
    n_reference: Sequence[int],
    n_observed: int,
    filter: bool = True,
) -> Tuple[pd.DataFrame, float]:
    """Adjust allele frequencies to a target ancestry composition with
    `Summix::adjAF`

    Parameters
    ----------
    data : pd.DataFrame
        table with the observed and reference allele frequencies. Columns are
        carried through to the result, so a row index column can be used to
        match the adjusted frequencies back.
    reference : List[str]
        columns of the reference allele frequencies
    observed : str
        column of the observed allele frequencies
    pi_target : Sequence[float]
        target ancestry proportions, in the order of `reference`
    pi_observed : Sequence[float]
        ancestry proportions of the observed data, in the order of `reference`
    adj_method : str
        "average" or "leave_one_out"
    n_reference : Sequence[int]
        number of individuals in each reference
    n_observed : int
        number of individuals in the observed data
    filter : bool
        whether adjAF removes the variants with a non-sensical adjusted
        frequency

    Returns
    -------
    pd.DataFrame
        the retained rows of `data` with an additional `adjustedAF` column
    float
        effective sample size
    """
    assert (
        len(reference) == len(pi_target) == len(pi_observed) == len(n_reference)
    ), "reference, pi_target, pi_observed and n_reference must have the same length"
    assert adj_method in ["average", "leave_one_out"]

    script = f"""
suppressPackageStartupMessages(library(Summix))
data <- read.delim("data.tsv", check.names = FALSE)
res <- adjAF(
    data = data,
    reference = {_r_vec(reference)},
    observed = "{observed}",
    pi.target = {_r_vec(pi_target)},
    pi.observed = {_r_vec(pi_observed)},
    adj_method = "{adj_method}",
    N_reference = {_r_vec(n_reference)},
    N_observed = {n_observed},
    filter = {_r_bool(filter)}
)
saveRDS(as.data.frame(res$adjusted.AF), "adjusted_af.rds")
saveRDS(data.frame(neff = res$effective.sample.size), "neff.rds")
"""
    import pyreadr

    with tempfile.TemporaryDirectory() as tmp_dir:
        with cd(tmp_dir):
            data.to_csv("data.tsv", sep="\t", index=False)
            run(script)
            df_adj = pyreadr.read_r("adjusted_af.rds")[None]
            neff = pyreadr.read_r("neff.rds")[None]["neff"].values[0]

    rvsim.logger.info(
        f"adjAF retained {len(df_adj)}/{len(data)} variants, "
        f"effective sample size={neff:.1f}"
    )
    return df_adj, float(neff)
