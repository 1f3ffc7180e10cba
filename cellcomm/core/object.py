"""The CommunicationObject class: expression matrices, inferred communication networks and their annotations for one
analysis run, or the comparison view over several runs produced by `merge`.
"""
import copy
from typing import Iterable, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..configuration import CKM
from ..errors import DimensionMismatchError, ImmutableAttributeError, InvalidInputError
from ..logging import logger_manager as lm
from .collection import DatasetCollection
from .database import LRDatabase
from .matrix import LabeledMatrix


def _alias(slot: str, doc: str) -> property:
    def getter(self):
        return getattr(self, slot)

    def setter(self, value):
        setattr(self, slot, value)

    return property(getter, setter, doc=doc)


def _empty_idents() -> pd.Categorical:
    return pd.Categorical([])


class CommunicationObject(object):
    """Container for the data and derived artifacts of a cell-cell communication analysis.

    Matrices are genes x cells `LabeledMatrix` instances (dense or sparse). Collaborators that normalize the data,
    infer communication probabilities or embed the cells write their results back into the object they were handed,
    see `cellcomm.tl`.

    Attributes:
        data_raw: Raw counts.
        data: Normalized expression.
        data_signaling: `data` restricted to the genes of the ligand-receptor database.
        data_scale: Scaled, dense expression.
        data_project: Expression after projection/smoothing.
        net: Communication networks, `net["prob"]` is a (K, K, N) array of the probability that sender group i
            signals to receiver group j through ligand-receptor pair n. `net["pval"]` has the same shape.
        netP: Networks on signaling pathway level, `netP["prob"]` of shape (K, K, P) and `netP["pathways"]`.
        meta: Per-cell annotations, one row per cell.
        idents: Cell group of each cell. On a merged object, one factor per dataset.
        DB: Ligand-receptor interaction database, write once.
        LR: Information on the ligand-receptor pairs used in the analysis, e.g. `LR["LRsig"]`.
        var_features: Informative genes selected upstream.
        dr: Method name to a cells x 2 coordinate frame.
        options: Parameters used throughout the analysis.
        merged_slots: None for a single-dataset object; the slot names carried over by `merge` otherwise.
        dataset_names: Dataset names of a merged object, if given.
    """

    def __init__(
        self,
        data_raw: Optional[LabeledMatrix] = None,
        data: Optional[LabeledMatrix] = None,
        data_signaling: Optional[LabeledMatrix] = None,
        data_scale: Optional[LabeledMatrix] = None,
        data_project: Optional[LabeledMatrix] = None,
        net: Union[dict, DatasetCollection, None] = None,
        netP: Union[dict, DatasetCollection, None] = None,
        meta: Optional[pd.DataFrame] = None,
        idents: Union[pd.Categorical, DatasetCollection, None] = None,
        DB: Optional[LRDatabase] = None,
        LR: Union[dict, DatasetCollection, None] = None,
        var_features: Optional[Sequence[str]] = None,
        dr: Optional[dict] = None,
        options: Optional[dict] = None,
    ):
        self.data_raw = LabeledMatrix.empty() if data_raw is None else data_raw
        self.data = LabeledMatrix.empty() if data is None else data
        self.data_signaling = LabeledMatrix.empty() if data_signaling is None else data_signaling
        self.data_scale = LabeledMatrix.empty() if data_scale is None else data_scale
        self.data_project = LabeledMatrix.empty() if data_project is None else data_project
        self.net = {} if net is None else net
        self.netP = {} if netP is None else netP
        self.meta = pd.DataFrame() if meta is None else meta
        self.idents = _empty_idents() if idents is None else idents
        self._DB = None
        if DB is not None:
            self.DB = DB
        self.LR = {} if LR is None else LR
        self.var_features = [] if var_features is None else list(var_features)
        self.dr = {} if dr is None else dr
        self.options = {} if options is None else options

        self.merged_slots = None
        self.dataset_names = None

    # Descriptive aliases of the slots.
    raw_data = _alias(CKM.DATA_RAW_KEY, "Unprocessed input counts.")
    signaling_data = _alias(CKM.DATA_SIGNALING_KEY, "Expression restricted to signaling genes.")
    scaled_data = _alias(CKM.DATA_SCALE_KEY, "Scaled expression.")
    projected_data = _alias(CKM.DATA_PROJECT_KEY, "Projected expression.")
    metadata = _alias(CKM.META_KEY, "Per-cell annotations.")
    group_labels = _alias(CKM.IDENTS_KEY, "Cell group assignment.")
    ligand_receptor_db = _alias(CKM.DB_KEY, "Ligand-receptor interaction database.")
    lr_info = _alias(CKM.LR_KEY, "Ligand-receptor pairs used in the analysis.")
    variable_features = _alias(CKM.VAR_FEATURES_KEY, "Informative genes.")
    reduced_coords = _alias(CKM.DR_KEY, "Dimensionality reduction embeddings.")

    @property
    def DB(self) -> Optional[LRDatabase]:
        return self._DB

    @DB.setter
    def DB(self, db: LRDatabase):
        if self._DB is not None:
            if db is self._DB:
                return
            raise ImmutableAttributeError("DB: a ligand-receptor database is already attached and cannot be replaced.")
        if not isinstance(db, LRDatabase):
            raise InvalidInputError(f"DB: expected an LRDatabase, got {type(db).__name__}.")
        self._DB = db

    @property
    def probability_tensor(self) -> Optional[np.ndarray]:
        if self.is_merged:
            return None
        return self.net.get(CKM.NET_PROB_KEY)

    @property
    def pathway_tensor(self) -> Optional[np.ndarray]:
        if self.is_merged:
            return None
        return self.netP.get(CKM.NET_PROB_KEY)

    @property
    def is_merged(self) -> bool:
        return CKM.is_merged(self)

    @property
    def n_genes(self) -> int:
        return self.data.n_rows

    @property
    def n_cells(self) -> int:
        return self.data.n_cols

    @property
    def cell_names(self) -> pd.Index:
        return self.data.col_names

    @property
    def gene_names(self) -> pd.Index:
        return self.data.row_names

    def is_default(self, slot: str) -> bool:
        """Whether `slot` still holds its default, empty value."""
        value = getattr(self, slot)
        if slot in CKM.MATRIX_SLOTS:
            return value.is_empty
        if slot == CKM.DB_KEY:
            return value is None
        if slot == CKM.META_KEY:
            return value.shape == (0, 0)
        return len(value) == 0

    def describe(self) -> str:
        summary = f"An object of class {type(self).__name__} \n {self.n_genes} genes.\n {self.n_cells} cells."
        if self.is_merged:
            n_datasets = len(getattr(self, self.merged_slots[0]))
            names = "" if self.dataset_names is None else ": " + ", ".join(self.dataset_names)
            summary += f"\n Merged from {n_datasets} datasets{names}.\n " + CKM.merged_slot_message(self.merged_slots)
        return summary

    def __repr__(self) -> str:
        return self.describe()

    def copy(self) -> "CommunicationObject":
        lm.main_info(
            "Deep copying CommunicationObject and working on the new copy. Original object will not be modified.",
            indent_level=1,
        )
        return copy.deepcopy(self)

    def add_meta(self, meta: pd.DataFrame):
        """Attach per-cell annotations, aligned to the cell order of `data`. Existing columns are overwritten."""
        if not isinstance(meta, pd.DataFrame):
            raise InvalidInputError(f"meta: expected a data frame, got {type(meta).__name__}.")
        if not meta.index.is_unique:
            raise InvalidInputError("meta: cell identifiers in the index are not unique.")
        if not self.data.is_empty:
            missing = self.cell_names.difference(meta.index)
            if len(missing) > 0:
                raise DimensionMismatchError(
                    f"meta: {len(missing)} cells of `data` have no metadata, e.g. {missing.tolist()[:5]}."
                )
            meta = meta.loc[self.cell_names]
        lm.main_info_insert_attribute(", ".join(map(str, meta.columns)), obj_attr=CKM.META_KEY)
        if self.is_default(CKM.META_KEY):
            self.meta = meta.copy()
        else:
            if not self.meta.index.equals(meta.index):
                raise DimensionMismatchError("meta: new annotations are indexed by different cells.")
            for column in meta.columns:
                self.meta[column] = meta[column]

    def set_idents(self, labels: Union[str, Iterable], levels: Optional[Sequence] = None):
        """Set the cell groups.

        Args:
            labels: Name of a `meta` column, or one label per cell. A series indexed by cell names is aligned to the
                cells of `data`.
            levels: Order of the groups. Defaults to the sorted unique labels.
        """
        if isinstance(labels, str):
            if labels not in self.meta.columns:
                raise InvalidInputError(f"idents: `{labels}` is not a column of meta.")
            labels = self.meta[labels]
        if isinstance(labels, pd.Series) and not self.data.is_empty and not labels.index.equals(self.cell_names):
            if len(self.cell_names.difference(labels.index)) > 0:
                raise DimensionMismatchError("idents: labels are missing for some cells of `data`.")
            labels = labels.loc[self.cell_names]

        labels = np.asarray(list(labels), dtype=object)
        idents = pd.Categorical(labels, categories=levels)
        if not self.data.is_empty and len(idents) != self.n_cells:
            raise DimensionMismatchError(f"idents: got {len(idents)} labels for {self.n_cells} cells.")
        if levels is not None and pd.isna(idents).sum() > pd.isna(labels).sum():
            raise InvalidInputError("idents: some labels are not among the given levels.")
        lm.main_info_insert_attribute(f"{len(idents.categories)} cell groups", obj_attr=CKM.IDENTS_KEY)
        self.idents = idents

    def validate(self):
        """Best-effort consistency checks between slots.

        Raises:
            DimensionMismatchError: a slot disagrees with the shape implied by another one. The tensor values
                themselves, including NaN or negative entries, are not examined.
        """
        if self.is_merged:
            for i, (key, net, idents) in enumerate(zip(self.net.keys(), self.net, self.idents)):
                attr = f"net[{key!r}] (dataset {i})" if self.net.is_named else f"net[{i}]"
                _check_groups(net, idents if len(idents) > 0 else None, attr)
            return

        n_cells = self.n_cells
        if not self.data.is_empty:
            if not self.is_default(CKM.META_KEY) and self.meta.shape[0] != n_cells:
                raise DimensionMismatchError(f"meta: has {self.meta.shape[0]} rows for {n_cells} cells.")
            if len(self.idents) > 0 and len(self.idents) != n_cells:
                raise DimensionMismatchError(f"idents: has {len(self.idents)} labels for {n_cells} cells.")
            if not self.data_signaling.is_empty:
                extra = self.data_signaling.row_names.difference(self.gene_names)
                if len(extra) > 0:
                    raise DimensionMismatchError(f"data_signaling: genes {extra.tolist()[:5]} are not in `data`.")
            extra = pd.Index(self.var_features).difference(self.gene_names)
            if len(extra) > 0:
                raise DimensionMismatchError(f"var_features: genes {extra.tolist()[:5]} are not in `data`.")
            for method, coords in self.dr.items():
                if coords.shape[0] != n_cells:
                    raise DimensionMismatchError(f"dr[{method!r}]: has {coords.shape[0]} rows for {n_cells} cells.")

        if not self.data_signaling.is_empty:
            for slot in (CKM.DATA_SCALE_KEY, CKM.DATA_PROJECT_KEY):
                matrix = getattr(self, slot)
                if not matrix.is_empty and matrix.shape != self.data_signaling.shape:
                    raise DimensionMismatchError(
                        f"{slot}: shape {matrix.shape} differs from data_signaling {self.data_signaling.shape}."
                    )

        _check_groups(self.net, self.idents if len(self.idents) > 0 else None, CKM.NET_KEY)
        _check_groups(self.netP, self.idents if len(self.idents) > 0 else None, CKM.NETP_KEY)


def _check_groups(net: dict, idents: Optional[pd.Categorical], attr: str):
    prob = net.get(CKM.NET_PROB_KEY) if isinstance(net, dict) else None
    if prob is None:
        return
    prob = np.asarray(prob)
    if prob.ndim != 3 or prob.shape[0] != prob.shape[1]:
        raise DimensionMismatchError(f"{attr}: probability tensor must have shape (K, K, N), got {prob.shape}.")
    pval = net.get(CKM.NET_PVAL_KEY)
    if pval is not None and np.shape(pval) != prob.shape:
        raise DimensionMismatchError(f"{attr}: p-values of shape {np.shape(pval)} differ from {prob.shape}.")
    if idents is not None and len(idents.categories) != prob.shape[0]:
        raise DimensionMismatchError(
            f"{attr}: {len(idents.categories)} cell groups in idents but the tensor has K = {prob.shape[0]}."
        )


def describe(obj: CommunicationObject) -> str:
    """Human readable summary: class name, number of genes and number of cells."""
    return obj.describe()
