from unittest import TestCase

import pandas as pd

from cellcomm.core import LRDatabase
from cellcomm.errors import InvalidInputError

from ..mixins import TestMixin, create_db


class TestLRDatabase(TestMixin, TestCase):
    def test_genes_resolves_complexes(self):
        db = create_db()
        self.assertEqual(
            ["Tgfb1", "Wnt5a", "Cxcl12", "Tgfbr1", "Tgfbr2", "Acvr1", "Fzd1", "Cxcr4"],
            db.genes(),
        )
        self.assertEqual(["Tgfbr1", "Tgfbr2"], db.receptor_genes("TGFB1_TGFBR1_TGFBR2"))
        self.assertEqual(["Tgfb1"], db.ligand_genes("TGFB1_TGFBR1_TGFBR2"))

    def test_immutable(self):
        db = create_db()
        with self.assertRaises(AttributeError):
            db.interaction = pd.DataFrame()
        with self.assertRaises(AttributeError):
            del db.complex

    def test_tables_cannot_be_edited_in_place(self):
        db = create_db()
        db.interaction.loc["WNT5A_FZD1", "ligand"] = "Gene9"
        db.complex.loc["TGFbR1_R2", "subunit_1"] = "Gene9"
        self.assertEqual("Wnt5a", db.interaction.loc["WNT5A_FZD1", "ligand"])
        self.assertEqual(["Tgfbr1", "Tgfbr2"], db.receptor_genes("TGFB1_TGFBR1_TGFBR2"))

    def test_copies_tables(self):
        interaction = pd.DataFrame({"ligand": ["A"], "receptor": ["B"]}, index=["A_B"])
        db = LRDatabase(interaction)
        interaction.loc["A_B", "ligand"] = "C"
        self.assertEqual("A", db.interaction.loc["A_B", "ligand"])

    def test_requires_columns(self):
        with self.assertRaises(InvalidInputError):
            LRDatabase(pd.DataFrame({"ligand": ["A"]}, index=["A_B"]))
        with self.assertRaises(InvalidInputError):
            LRDatabase(pd.DataFrame({"ligand": [], "receptor": []}))
        with self.assertRaises(InvalidInputError):
            LRDatabase(pd.DataFrame({"ligand": ["A", "A"], "receptor": ["B", "B"]}, index=["A_B", "A_B"]))
