import logging
from unittest import TestCase

import numpy as np
import pandas as pd

from cellcomm.configuration import config
from cellcomm.core import LRDatabase


def create_counts_frame(shape=(4, 3), seed=0):
    rng = np.random.default_rng(seed)
    return pd.DataFrame(
        rng.poisson(2, size=shape).astype(float),
        index=[f"gene{i}" for i in range(shape[0])],
        columns=[f"cell{j}" for j in range(shape[1])],
    )


def create_db():
    interaction = pd.DataFrame(
        {
            "ligand": ["Tgfb1", "Tgfb1", "Wnt5a", "Cxcl12"],
            "receptor": ["TGFbR1_R2", "Acvr1", "Fzd1", "Cxcr4"],
            "pathway_name": ["TGFb", "TGFb", "WNT", "CXCL"],
        },
        index=["TGFB1_TGFBR1_TGFBR2", "TGFB1_ACVR1", "WNT5A_FZD1", "CXCL12_CXCR4"],
    )
    complex = pd.DataFrame(
        {"subunit_1": ["Tgfbr1"], "subunit_2": ["Tgfbr2"], "subunit_3": [""]},
        index=["TGFbR1_R2"],
    )
    return LRDatabase(interaction, complex=complex)


class TestMixin(TestCase):
    @classmethod
    def setUpClass(cls):
        config.logging_level = logging.WARNING

    @classmethod
    def tearDownClass(cls):
        config.logging_level = logging.INFO
