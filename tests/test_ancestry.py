"""
Ancestry proportion estimation and allele frequency adjustment, with the Summix
calls replaced by fakes
"""
import numpy as np
import pandas as pd
import pytest
import rvsim


def _toy_counts():
    return pd.DataFrame(
        {
            "ac": [0, 10, 1, 150, 2],
            "af": [0.0, 0.05, 0.005, 0.75, 0.01],
            "af_afr": [0.0, 0.001, 0.2, 0.8, 0.0],
            "af_nfe": [0.0, 0.002, 0.001, 0.7, 0.999],
        }
    )


def test_common_variants():
    counts = _toy_counts()
    common = rvsim.ancestry.common_variants(counts, ["AFR", "NFE"], maf=0.01)
    # row 4: af = maf is not strictly inside, af_nfe = 1 - maf neither
    assert list(common) == [False, True, True, True, False]
    common = rvsim.ancestry.common_variants(counts, ["NFE"], maf=0.01)
    assert list(common) == [False, True, False, True, False]


def test_est_props(monkeypatch):
    received = dict()
    est = pd.DataFrame(
        {"goodness.of.fit": [0.5], "af_afr": [0.2], "af_nfe": [0.8]}
    )

    def fake_summix(**kwargs):
        received.update(kwargs)
        return est

    monkeypatch.setattr(rvsim.tools.summix, "summix", fake_summix)

    counts = _toy_counts()
    res = rvsim.ancestry.est_props(counts, ["AFR", "NFE"], maf=0.01)
    assert res is est
    assert received["data"].equals(counts.iloc[[1, 2, 3]])
    assert received["reference"] == ["af_afr", "af_nfe"]
    assert received["observed"] == "af"
    assert received["goodness_of_fit"] is True
    assert received["override_remove_small_ref"] is True

    with pytest.raises(ValueError):
        rvsim.ancestry.est_props(counts.iloc[[0]], ["AFR", "NFE"], maf=0.01)


def _fake_adj_af(received, drop_rows, neff):
    def fake_adj_af(**kwargs):
        received.update(kwargs)
        data = kwargs["data"]
        df_adj = data[~data["row"].isin(drop_rows)].copy()
        df_adj["adjustedAF"] = df_adj["af"] * 0.5
        return df_adj, neff

    return fake_adj_af


def test_calc_adjusted_af(monkeypatch):
    received = dict()
    monkeypatch.setattr(
        rvsim.tools.summix, "adj_af", _fake_adj_af(received, [2], 150.0)
    )
    counts = _toy_counts()
    case_est = pd.DataFrame({"goodness.of.fit": [0.1], "af_afr": [0.3], "af_nfe": [0.7]})
    control_est = {"af_nfe": 0.9, "af_afr": 0.1}

    counts_adj = rvsim.ancestry.calc_adjusted_af(
        counts, ["AFR", "NFE"], case_est, control_est, n_ref=[700, 7000], n_cc=100
    )
    assert list(counts_adj.columns) == ["ac", "af"]
    assert len(counts_adj) == len(counts)
    # row 2 removed by the adjustment is monomorphic
    assert np.allclose(counts_adj.af.values, [0.0, 0.025, 0.0, 0.375, 0.005])
    assert np.all(counts_adj.ac.values == [0, 5, 0, 75, 1])

    assert received["reference"] == ["af_afr", "af_nfe"]
    assert received["observed"] == "af"
    assert np.allclose(received["pi_target"], [0.3, 0.7])
    assert np.allclose(received["pi_observed"], [0.1, 0.9])
    assert received["adj_method"] == "average"
    assert list(received["n_reference"]) == [700, 7000]
    assert received["n_observed"] == 100
    assert received["filter"] is True
    assert list(received["data"]["row"]) == [0, 1, 2, 3, 4]
    # input is untouched
    assert "row" not in counts.columns


def test_calc_adjusted_af_neff(monkeypatch):
    received = dict()
    monkeypatch.setattr(rvsim.tools.summix, "adj_af", _fake_adj_af(received, [], 300.0))
    counts = _toy_counts()
    est = {"af_afr": 0.5, "af_nfe": 0.5}

    counts_adj, neff = rvsim.ancestry.calc_adjusted_af(
        counts, ["AFR", "NFE"], est, est, n_ref=[700, 7000], n_cc=100, use_neff=True
    )
    assert neff == 300.0
    assert np.allclose(counts_adj.af.values, counts.af.values * 0.5)
    assert np.all(counts_adj.ac.values == np.round(counts.af.values * 0.5 * 600))

    with pytest.raises(ValueError):
        rvsim.ancestry.calc_adjusted_af(
            counts, ["AFR", "NFE"], est, est, n_ref=[700], n_cc=100
        )


def test_r_vec():
    from rvsim.tools.summix import _r_vec

    assert _r_vec(["af_afr", "af_nfe"]) == 'c("af_afr", "af_nfe")'
    assert _r_vec([0.25, 1]) == "c(0.25, 1.0)"
