from unittest import TestCase

import numpy as np
import pandas as pd

from cellcomm.core import CommunicationObject, LabeledMatrix, create
from cellcomm.errors import (
    DimensionMismatchError,
    ImmutableAttributeError,
    InvalidInputError,
)

from ..mixins import TestMixin, create_counts_frame, create_db


class TestCommunicationObject(TestMixin, TestCase):
    def setUp(self):
        self.obj = create(create_counts_frame((4, 3)))

    def test_aliases(self):
        matrix = LabeledMatrix(np.ones((2, 3)), row_names=["gene0", "gene1"], col_names=["cell0", "cell1", "cell2"])
        self.obj.signaling_data = matrix
        self.assertIs(matrix, self.obj.data_signaling)
        self.obj.variable_features = ["gene0"]
        self.assertEqual(["gene0"], self.obj.var_features)
        self.assertIs(self.obj.dr, self.obj.reduced_coords)
        self.assertIs(self.obj.LR, self.obj.lr_info)
        self.assertIs(self.obj.meta, self.obj.metadata)
        self.assertIs(self.obj.data_raw, self.obj.raw_data)

    def test_probability_tensor(self):
        self.assertIsNone(self.obj.probability_tensor)
        self.assertIsNone(self.obj.pathway_tensor)
        prob = np.zeros((2, 2, 3))
        self.obj.net = {"prob": prob}
        self.assertIs(prob, self.obj.probability_tensor)

    def test_db_write_once(self):
        db = create_db()
        self.obj.DB = db
        self.assertIs(db, self.obj.ligand_receptor_db)
        self.obj.DB = db
        with self.assertRaises(ImmutableAttributeError):
            self.obj.DB = create_db()

    def test_db_type(self):
        with self.assertRaises(InvalidInputError):
            self.obj.DB = {"interaction": None}

    def test_set_idents(self):
        self.obj.set_idents(["B", "T", "B"], levels=["T", "B"])
        self.assertEqual(["T", "B"], list(self.obj.idents.categories))
        with self.assertRaises(DimensionMismatchError):
            self.obj.set_idents(["B", "T"])
        with self.assertRaises(InvalidInputError):
            self.obj.set_idents(["B", "T", "NK"], levels=["T", "B"])
        with self.assertRaises(InvalidInputError):
            self.obj.set_idents("labels")

    def test_set_idents_aligns_series(self):
        labels = pd.Series(["x", "y", "z"], index=["cell2", "cell1", "cell0"])
        self.obj.set_idents(labels)
        self.assertEqual(["z", "y", "x"], list(self.obj.idents))

    def test_add_meta(self):
        self.obj.add_meta(pd.DataFrame({"batch": [1, 2, 3]}, index=["cell0", "cell1", "cell2"]))
        self.obj.add_meta(pd.DataFrame({"labels": ["a", "b", "a"]}, index=["cell0", "cell1", "cell2"]))
        self.assertEqual(["batch", "labels"], self.obj.meta.columns.tolist())
        self.obj.set_idents("labels")
        self.assertEqual(["a", "b"], list(self.obj.idents.categories))
        with self.assertRaises(InvalidInputError):
            self.obj.add_meta({"batch": [1, 2, 3]})

    def test_validate_group_count(self):
        self.obj.set_idents(["a", "b", "a"])
        self.obj.net = {"prob": np.zeros((3, 3, 2))}
        with self.assertRaises(DimensionMismatchError) as cm:
            self.obj.validate()
        self.assertIn("net", str(cm.exception))

    def test_validate_tensor_shape(self):
        self.obj.net = {"prob": np.zeros((2, 3, 2))}
        with self.assertRaises(DimensionMismatchError):
            self.obj.validate()
        self.obj.net = {"prob": np.zeros((2, 2, 2)), "pval": np.zeros((2, 2, 3))}
        with self.assertRaises(DimensionMismatchError):
            self.obj.validate()

    def test_validate_does_not_inspect_values(self):
        self.obj.set_idents(["a", "b", "a"])
        self.obj.net = {"prob": np.full((2, 2, 1), np.nan)}
        self.obj.net["prob"][0, 0, 0] = -1
        self.obj.validate()

    def test_validate_signaling_genes(self):
        self.obj.data_signaling = LabeledMatrix(
            np.ones((1, 3)), row_names=["unknown"], col_names=["cell0", "cell1", "cell2"]
        )
        with self.assertRaises(DimensionMismatchError) as cm:
            self.obj.validate()
        self.assertIn("data_signaling", str(cm.exception))

    def test_validate_scale_shape(self):
        self.obj.data_signaling = self.obj.data.subset_rows(["gene0", "gene1"])
        self.obj.data_scale = LabeledMatrix(np.ones((1, 3)), row_names=["gene0"], col_names=["cell0", "cell1", "cell2"])
        with self.assertRaises(DimensionMismatchError) as cm:
            self.obj.validate()
        self.assertIn("data_scale", str(cm.exception))

    def test_validate_var_features_and_dr(self):
        self.obj.var_features = ["gene9"]
        with self.assertRaises(DimensionMismatchError):
            self.obj.validate()
        self.obj.var_features = ["gene1"]
        self.obj.dr["umap"] = np.zeros((2, 2))
        with self.assertRaises(DimensionMismatchError):
            self.obj.validate()

    def test_copy(self):
        self.obj.DB = create_db()
        self.obj.net = {"prob": np.zeros((1, 1, 1))}
        copied = self.obj.copy()
        self.assertIsNot(self.obj.net, copied.net)
        self.assertIs(self.obj.DB, copied.DB)
        copied.net["prob"][0, 0, 0] = 1
        self.assertEqual(0, self.obj.net["prob"][0, 0, 0])
        self.assertTrue(self.obj.data.equals(copied.data))

    def test_default_object(self):
        obj = CommunicationObject()
        for slot in ("data", "net", "meta", "idents", "DB", "options"):
            self.assertTrue(obj.is_default(slot))
        self.assertEqual(0, obj.n_genes)
        obj.validate()
